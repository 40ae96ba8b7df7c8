from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from authentication.directory import get_user_directory
from authentication.sessions import get_session_store
from authentication.serializers import SignupSerializer, LoginSerializer, UserSerializer
import logging

logger = logging.getLogger(__name__)


def set_session_cookie(response, token):
    response.set_cookie(
        settings.MINDLYST_SESSION_COOKIE,
        token,
        max_age=settings.MINDLYST_SESSION_MAX_AGE,
        path='/',
        httponly=True,
        samesite='Lax',
        secure=not settings.DEBUG,
    )


class SignupView(APIView):
    authentication_classes = []

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        directory = get_user_directory()
        if directory.find_by_email(data['email']):
            return Response({"error": "Cet email est déjà enregistré"}, status=status.HTTP_409_CONFLICT)
        if directory.find_by_username(data['username']):
            return Response({"error": "Ce pseudo est déjà pris"}, status=status.HTTP_409_CONFLICT)

        user = directory.create(data['email'], data['username'], data['password'])
        logger.info(f"User {user.username} signed up (id={user.id})")
        return Response({"success": True}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Email et mot de passe requis"}, status=status.HTTP_400_BAD_REQUEST)

        user = get_user_directory().authenticate(
            serializer.validated_data['email'], serializer.validated_data['password']
        )
        if user is None:
            logger.warning("Failed login attempt")
            return Response({"error": "Identifiants invalides"}, status=status.HTTP_401_UNAUTHORIZED)

        sessions = get_session_store()
        existing_token = request.COOKIES.get(settings.MINDLYST_SESSION_COOKIE)
        if existing_token:
            sessions.delete(existing_token)

        session = sessions.create(user.id)
        response = Response({"success": True}, status=status.HTTP_200_OK)
        set_session_cookie(response, session.token)
        logger.info(f"User {user.username} logged in")
        return response


class LogoutView(APIView):
    authentication_classes = []

    def post(self, request):
        token = request.COOKIES.get(settings.MINDLYST_SESSION_COOKIE)
        if token:
            get_session_store().delete(token)

        response = Response({"success": True}, status=status.HTTP_200_OK)
        response.delete_cookie(settings.MINDLYST_SESSION_COOKIE, path='/', samesite='Lax')
        return response


class UserProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = UserSerializer(request.user)
        return Response(serializer.data)
