import json
import uuid
from urllib.parse import parse_qs
from asgiref.sync import sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from authentication.backends import resolve_session_user
from .exceptions import ContactError
from .notifications import (
    anotify_users, user_group, request_created_events,
    request_accepted_events, request_rejected_events,
)
from . import services
import logging

logger = logging.getLogger(__name__)


class ContactConsumer(AsyncWebsocketConsumer):
    def _session_token(self):
        cookies = self.scope.get('cookies') or {}
        token = cookies.get(settings.MINDLYST_SESSION_COOKIE)
        if token:
            return token
        query = parse_qs(self.scope.get('query_string', b'').decode())
        return query.get('token', [None])[0]

    async def connect(self):
        token = self._session_token()
        if not token:
            logger.warning("No session token provided in WebSocket connection")
            await self.close(code=4001)
            return

        self.user = await sync_to_async(resolve_session_user)(token)
        if self.user is None:
            logger.warning("WebSocket connection with unknown or expired session")
            await self.close(code=4003)
            return

        self.group_name = user_group(self.user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"WebSocket connected for user {self.user.username} (id={self.user.id})")

    async def disconnect(self, close_code):
        if hasattr(self, 'group_name'):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def send_error(self, message):
        await self.send(text_data=json.dumps({
            "type": "error",
            "event_id": str(uuid.uuid4()),
            "message": message,
        }))

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '')
            if not isinstance(data, dict):
                raise json.JSONDecodeError("Expected an object", text_data, 0)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in WebSocket message: {str(e)}")
            await self.send_error("Message invalide")
            return

        message_type = data.get('type')
        try:
            if message_type == 'request':
                await self.handle_request(data.get('contactUserId'))
            elif message_type == 'accept':
                await self.handle_accept(data.get('requestId'))
            elif message_type == 'reject':
                await self.handle_reject(data.get('requestId'))
            else:
                await self.send_error("Type de message inconnu")
        except ContactError as e:
            logger.warning(f"WebSocket {message_type} refused for {self.user.username}: {e.message}")
            await self.send_error(e.message)
        except Exception as e:
            logger.error(f"Error in ContactConsumer.receive: {str(e)}")
            await self.send_error("Erreur lors du traitement de la demande")

    async def handle_request(self, contact_user_id):
        if not contact_user_id or not isinstance(contact_user_id, str):
            await self.send_error("ID du contact requis")
            return
        contact_request = await sync_to_async(services.create_contact_request)(self.user.id, contact_user_id)
        await anotify_users(self.channel_layer, request_created_events(contact_request))

    async def handle_accept(self, request_id):
        contact = await sync_to_async(services.accept_contact_request)(request_id, self.user.id)
        contact_request = await sync_to_async(services.get_contact_request)(request_id)
        requester_contacts = await sync_to_async(services.get_user_contacts)(contact_request.requester_id)
        requester_contact = next(
            (c for c in reversed(requester_contacts) if c.contact_user_id == self.user.id), None
        )
        await anotify_users(self.channel_layer, request_accepted_events(contact_request, contact, requester_contact))

    async def handle_reject(self, request_id):
        contact_request = await sync_to_async(services.reject_contact_request)(request_id, self.user.id)
        await anotify_users(self.channel_layer, request_rejected_events(contact_request))

    async def contact_request_received(self, event):
        await self.send(text_data=json.dumps(event))

    async def contact_request_sent(self, event):
        await self.send(text_data=json.dumps(event))

    async def contact_request_accepted(self, event):
        await self.send(text_data=json.dumps(event))

    async def contact_request_rejected(self, event):
        await self.send(text_data=json.dumps(event))

    async def contact_removed(self, event):
        await self.send(text_data=json.dumps(event))
