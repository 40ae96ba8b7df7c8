# contacts/notifications.py
import uuid
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from .serializers import ContactRequestSerializer, ContactSerializer


def user_group(user_id):
    return f"user_{user_id}"


def request_created_events(contact_request):
    event_id = str(uuid.uuid4())
    data = ContactRequestSerializer(contact_request).data
    return [
        (contact_request.recipient_id, {"type": "contact_request_received", "event_id": event_id, "request": data}),
        (contact_request.requester_id, {"type": "contact_request_sent", "event_id": event_id, "request": data}),
    ]


def request_accepted_events(contact_request, recipient_contact, requester_contact=None):
    event_id = str(uuid.uuid4())
    events = [
        (contact_request.recipient_id, {
            "type": "contact_request_accepted",
            "event_id": event_id,
            "requestId": contact_request.id,
            "contact": ContactSerializer(recipient_contact).data,
        }),
    ]
    requester_event = {
        "type": "contact_request_accepted",
        "event_id": event_id,
        "requestId": contact_request.id,
        "contact": ContactSerializer(requester_contact).data if requester_contact else None,
    }
    events.append((contact_request.requester_id, requester_event))
    return events


def request_rejected_events(contact_request):
    event_id = str(uuid.uuid4())
    return [
        (contact_request.requester_id, {
            "type": "contact_request_rejected",
            "event_id": event_id,
            "requestId": contact_request.id,
            "rejected_by": contact_request.recipient_id,
        }),
        (contact_request.recipient_id, {
            "type": "contact_request_rejected",
            "event_id": event_id,
            "requestId": contact_request.id,
            "rejected_user": contact_request.requester_username,
        }),
    ]


def contact_removed_events(user_id, contact_id):
    return [(user_id, {"type": "contact_removed", "event_id": str(uuid.uuid4()), "contactId": contact_id})]


def notify_users(events):
    """Push each ``(user_id, event)`` pair to every websocket that user has open."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    for user_id, event in events:
        async_to_sync(channel_layer.group_send)(user_group(user_id), event)


async def anotify_users(channel_layer, events):
    for user_id, event in events:
        await channel_layer.group_send(user_group(user_id), event)
