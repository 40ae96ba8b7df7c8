# contacts/serializers.py
from rest_framework import serializers
from authentication.serializers import UserSerializer  # Directory identity: id, email, username
from .models import STATUSES


class ContactRequestSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    requesterId = serializers.CharField(source='requester_id', read_only=True)
    requesterUsername = serializers.CharField(source='requester_username', read_only=True)
    requesterEmail = serializers.CharField(source='requester_email', read_only=True)
    recipientId = serializers.CharField(source='recipient_id', read_only=True)
    status = serializers.ChoiceField(choices=STATUSES, read_only=True)
    createdAt = serializers.IntegerField(source='created_at', read_only=True)


class ContactSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    userId = serializers.CharField(source='user_id', read_only=True)
    contactUserId = serializers.CharField(source='contact_user_id', read_only=True)
    contactUsername = serializers.CharField(source='contact_username', read_only=True)
    contactEmail = serializers.CharField(source='contact_email', read_only=True)
    createdAt = serializers.IntegerField(source='created_at', read_only=True)
