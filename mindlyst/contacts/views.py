from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from .exceptions import ContactError
from .serializers import ContactRequestSerializer, ContactSerializer, UserSerializer
from .notifications import (
    notify_users, request_created_events, request_accepted_events,
    request_rejected_events, contact_removed_events,
)
from . import services
import logging

logger = logging.getLogger(__name__)


def error_response(error):
    return Response({"error": error.message}, status=error.status_code)


def body_fields(request):
    # JSON bodies that are not objects carry no fields
    return request.data if isinstance(request.data, dict) else {}


def contacts_payload(user_id):
    return ContactSerializer(services.get_user_contacts(user_id), many=True).data


class ContactsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        user_id = request.user.id
        try:
            if request.query_params.get('type') == 'requests':
                pending = services.get_pending_contact_requests(user_id)
                return Response({"requests": ContactRequestSerializer(pending, many=True).data})

            search = request.query_params.get('search')
            if search:
                users = services.search_users_by_username(search, user_id)
                return Response({"users": UserSerializer(users, many=True).data})

            return Response({"contacts": contacts_payload(user_id)})
        except Exception as e:
            logger.error(f"Error in ContactsView.get: {str(e)}")
            return Response({"error": "Erreur lors de la récupération des contacts"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def post(self, request):
        user_id = request.user.id
        data = body_fields(request)
        contact_user_id = data.get('contactUserId')
        if not contact_user_id or not isinstance(contact_user_id, str):
            return Response({"error": "ID du contact requis"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            if data.get('action') == 'request':
                contact_request = services.create_contact_request(user_id, contact_user_id)
                notify_users(request_created_events(contact_request))
                logger.info(f"Contact request {contact_request.id} sent from {request.user.username} to {contact_user_id}")
                return Response(
                    {"request": ContactRequestSerializer(contact_request).data, "message": "Demande de contact envoyée"},
                    status=status.HTTP_201_CREATED,
                )

            # Legacy direct insert, kept for older clients
            contact = services.add_contact(user_id, contact_user_id)
            return Response(
                {"contact": ContactSerializer(contact).data, "contacts": contacts_payload(user_id)},
                status=status.HTTP_201_CREATED,
            )
        except ContactError as e:
            logger.warning(f"Contact operation refused for {request.user.username}: {e.message}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Error in ContactsView.post: {str(e)}")
            return Response({"error": "Erreur lors de l'ajout du contact"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def delete(self, request):
        user_id = request.user.id
        contact_id = body_fields(request).get('contactId')
        if not contact_id or not isinstance(contact_id, str):
            return Response({"error": "ID du contact requis"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            if not services.remove_contact(user_id, contact_id):
                logger.warning(f"Contact {contact_id} not found for user {user_id}")
                return Response({"error": "Contact non trouvé"}, status=status.HTTP_404_NOT_FOUND)

            notify_users(contact_removed_events(user_id, contact_id))
            logger.info(f"Contact {contact_id} removed by {request.user.username}")
            return Response({"success": True, "contacts": contacts_payload(user_id)}, status=status.HTTP_200_OK)
        except Exception as e:
            logger.error(f"Error in ContactsView.delete: {str(e)}")
            return Response({"error": "Erreur lors de la suppression du contact"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ContactRequestsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            pending = services.get_pending_contact_requests(request.user.id)
            return Response({"requests": ContactRequestSerializer(pending, many=True).data})
        except Exception as e:
            logger.error(f"Error in ContactRequestsView.get: {str(e)}")
            return Response({"error": "Erreur lors de la récupération des demandes"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def post(self, request):
        user_id = request.user.id
        data = body_fields(request)
        request_id = data.get('requestId')
        action = data.get('action')
        if not request_id or not isinstance(request_id, str):
            return Response({"error": "ID de la demande requis"}, status=status.HTTP_400_BAD_REQUEST)
        if action not in ('accept', 'reject'):
            return Response({"error": "Action invalide (accept ou reject requis)"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            if action == 'accept':
                contact = services.accept_contact_request(request_id, user_id)
                contact_request = services.get_contact_request(request_id)
                requester_contact = next(
                    (c for c in reversed(services.get_user_contacts(contact_request.requester_id))
                     if c.contact_user_id == user_id),
                    None,
                )
                notify_users(request_accepted_events(contact_request, contact, requester_contact))
                logger.info(f"Contact request {request_id} accepted by {request.user.username}")
                return Response(
                    {"success": True, "contact": ContactSerializer(contact).data, "contacts": contacts_payload(user_id)},
                    status=status.HTTP_200_OK,
                )

            contact_request = services.reject_contact_request(request_id, user_id)
            notify_users(request_rejected_events(contact_request))
            logger.info(f"Contact request {request_id} rejected by {request.user.username}")
            return Response({"success": True, "message": "Demande refusée"}, status=status.HTTP_200_OK)
        except ContactError as e:
            logger.warning(f"Contact request {request_id} refused for {request.user.username}: {e.message}")
            return error_response(e)
        except Exception as e:
            logger.error(f"Error in ContactRequestsView.post: {str(e)}")
            return Response({"error": "Erreur lors du traitement de la demande"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class SentContactRequestsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            sent = services.get_sent_contact_requests(request.user.id)
            return Response({"requests": ContactRequestSerializer(sent, many=True).data})
        except Exception as e:
            logger.error(f"Error in SentContactRequestsView: {str(e)}")
            return Response({"error": "Erreur lors de la récupération des demandes envoyées"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class FindUserView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        username = request.query_params.get('username')
        if not username:
            return Response({"error": "Pseudo requis"}, status=status.HTTP_400_BAD_REQUEST)

        user = services.find_user_by_username(username)
        if user is None:
            return Response({"error": "Utilisateur non trouvé"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"user": UserSerializer(user).data})
