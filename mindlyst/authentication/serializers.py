import re
from rest_framework import serializers


class UserSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    username = serializers.CharField(read_only=True)


class SignupSerializer(serializers.Serializer):
    email = serializers.CharField()
    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        value = value.lower().strip()
        if not re.match(r'^[^@\s]+@[^@\s]+$', value):
            raise serializers.ValidationError("Adresse email invalide.")
        return value

    def validate_username(self, value):
        value = value.strip()
        if len(value) < 3 or len(value) > 20:
            raise serializers.ValidationError("Le pseudo doit contenir entre 3 et 20 caractères.")
        if not re.match(r'^[a-zA-Z0-9_]+$', value):
            raise serializers.ValidationError("Le pseudo ne peut contenir que des lettres, chiffres et underscores.")
        return value

    def validate_password(self, value):
        if len(value) < 8:
            raise serializers.ValidationError("Le mot de passe doit contenir au moins 8 caractères.")
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
