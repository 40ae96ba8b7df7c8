import pytest
from asgiref.sync import sync_to_async
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator

from authentication.sessions import SessionStore
from contacts import services
from contacts.notifications import user_group
from contacts.services import get_pending_contact_requests
from mindlyst.asgi import application


def communicator_for(token=None, query=""):
    headers = []
    if token:
        headers.append((b"cookie", f"mindlyst_session={token}".encode()))
    return WebsocketCommunicator(application, f"/ws/contacts/{query}", headers=headers)


@pytest.mark.asyncio
async def test_connection_without_token_is_refused():
    communicator = communicator_for()

    connected, code = await communicator.connect()

    assert connected is False
    assert code == 4001
    await communicator.disconnect()


@pytest.mark.asyncio
async def test_connection_with_unknown_session_is_refused():
    communicator = communicator_for("forged")

    connected, code = await communicator.connect()

    assert connected is False
    assert code == 4003
    await communicator.disconnect()


@pytest.mark.asyncio
async def test_group_events_are_forwarded(make_user):
    alice = make_user("alice")
    session = SessionStore().create(alice.id)
    communicator = communicator_for(session.token)
    connected, _ = await communicator.connect()
    assert connected

    await get_channel_layer().group_send(user_group(alice.id), {
        "type": "contact_request_received",
        "event_id": "e1",
        "request": {"id": "r1"},
    })

    message = await communicator.receive_json_from()
    assert message["type"] == "contact_request_received"
    assert message["request"] == {"id": "r1"}
    await communicator.disconnect()


@pytest.mark.asyncio
async def test_token_query_parameter_and_request_frame(make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    session = SessionStore().create(alice.id)
    communicator = communicator_for(query=f"?token={session.token}")
    connected, _ = await communicator.connect()
    assert connected

    await communicator.send_json_to({"type": "request", "contactUserId": bob.id})

    message = await communicator.receive_json_from()
    assert message["type"] == "contact_request_sent"
    assert message["request"]["recipientId"] == bob.id
    assert [r.requester_id for r in get_pending_contact_requests(bob.id)] == [alice.id]
    await communicator.disconnect()


@pytest.mark.asyncio
async def test_refused_operation_replies_with_error(make_user):
    alice = make_user("alice")
    session = SessionStore().create(alice.id)
    communicator = communicator_for(session.token)
    await communicator.connect()

    await communicator.send_json_to({"type": "request", "contactUserId": alice.id})
    self_request = await communicator.receive_json_from()

    await communicator.send_json_to({"type": "accept", "requestId": "missing"})
    missing = await communicator.receive_json_from()

    assert self_request["type"] == "error"
    assert missing["type"] == "error"
    await communicator.disconnect()


async def connected(user):
    communicator = communicator_for(SessionStore().create(user.id).token)
    ok, _ = await communicator.connect()
    assert ok
    return communicator


@pytest.mark.asyncio
async def test_accept_frame_notifies_both_parties(make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_ws = await connected(alice)
    bob_ws = await connected(bob)

    await alice_ws.send_json_to({"type": "request", "contactUserId": bob.id})
    sent = await alice_ws.receive_json_from()
    received = await bob_ws.receive_json_from()
    assert sent["type"] == "contact_request_sent"
    assert received["type"] == "contact_request_received"
    request_id = received["request"]["id"]

    await bob_ws.send_json_to({"type": "accept", "requestId": request_id})
    bob_event = await bob_ws.receive_json_from()
    alice_event = await alice_ws.receive_json_from()

    assert bob_event["type"] == alice_event["type"] == "contact_request_accepted"
    assert bob_event["requestId"] == alice_event["requestId"] == request_id
    assert bob_event["contact"]["userId"] == bob.id
    assert bob_event["contact"]["contactUserId"] == alice.id
    assert alice_event["contact"]["userId"] == alice.id
    assert alice_event["contact"]["contactUsername"] == "bob"
    await alice_ws.disconnect()
    await bob_ws.disconnect()


@pytest.mark.asyncio
async def test_reject_frame_notifies_both_parties(make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_ws = await connected(alice)
    bob_ws = await connected(bob)

    await alice_ws.send_json_to({"type": "request", "contactUserId": bob.id})
    await alice_ws.receive_json_from()
    request_id = (await bob_ws.receive_json_from())["request"]["id"]

    await bob_ws.send_json_to({"type": "reject", "requestId": request_id})
    bob_event = await bob_ws.receive_json_from()
    alice_event = await alice_ws.receive_json_from()

    assert bob_event["type"] == alice_event["type"] == "contact_request_rejected"
    assert alice_event["rejected_by"] == bob.id
    assert bob_event["rejected_user"] == "alice"
    assert await alice_ws.receive_nothing()
    await alice_ws.disconnect()
    await bob_ws.disconnect()


@pytest.mark.asyncio
async def test_http_accept_notifies_both_parties(make_user, client_for):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_client = client_for(alice)
    bob_client = client_for(bob)
    created = await sync_to_async(alice_client.post)(
        '/api/contacts/', {"contactUserId": bob.id, "action": "request"}, format='json')
    request_id = created.json()["request"]["id"]
    alice_ws = await connected(alice)
    bob_ws = await connected(bob)

    response = await sync_to_async(bob_client.post)(
        '/api/contacts/requests/', {"requestId": request_id, "action": "accept"}, format='json')
    assert response.status_code == 200

    bob_event = await bob_ws.receive_json_from()
    alice_event = await alice_ws.receive_json_from()
    assert bob_event["type"] == alice_event["type"] == "contact_request_accepted"
    assert bob_event["contact"]["userId"] == bob.id
    assert alice_event["contact"]["userId"] == alice.id
    await alice_ws.disconnect()
    await bob_ws.disconnect()


@pytest.mark.asyncio
async def test_http_reject_notifies_both_parties(make_user, client_for):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_client = client_for(alice)
    bob_client = client_for(bob)
    created = await sync_to_async(alice_client.post)(
        '/api/contacts/', {"contactUserId": bob.id, "action": "request"}, format='json')
    request_id = created.json()["request"]["id"]
    alice_ws = await connected(alice)
    bob_ws = await connected(bob)

    await sync_to_async(bob_client.post)(
        '/api/contacts/requests/', {"requestId": request_id, "action": "reject"}, format='json')

    alice_event = await alice_ws.receive_json_from()
    bob_event = await bob_ws.receive_json_from()
    assert alice_event == {
        "type": "contact_request_rejected",
        "event_id": alice_event["event_id"],
        "requestId": request_id,
        "rejected_by": bob.id,
    }
    assert bob_event["rejected_user"] == "alice"
    await alice_ws.disconnect()
    await bob_ws.disconnect()


@pytest.mark.asyncio
async def test_http_remove_notifies_owner_only(make_user, client_for):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_client = client_for(alice)
    added = await sync_to_async(alice_client.post)('/api/contacts/', {"contactUserId": bob.id}, format='json')
    contact_id = added.json()["contact"]["id"]
    alice_ws = await connected(alice)
    bob_ws = await connected(bob)

    response = await sync_to_async(alice_client.delete)('/api/contacts/', {"contactId": contact_id}, format='json')
    assert response.status_code == 200

    event = await alice_ws.receive_json_from()
    assert event["type"] == "contact_removed"
    assert event["contactId"] == contact_id
    assert await bob_ws.receive_nothing()
    await alice_ws.disconnect()
    await bob_ws.disconnect()


@pytest.mark.asyncio
async def test_unexpected_failure_replies_with_error(make_user, monkeypatch):
    alice = make_user("alice")
    bob = make_user("bob")

    def broken(requester_id, recipient_id):
        raise OSError("disk full")

    monkeypatch.setattr(services, "create_contact_request", broken)
    communicator = await connected(alice)

    await communicator.send_json_to({"type": "request", "contactUserId": bob.id})
    message = await communicator.receive_json_from()

    assert message["type"] == "error"
    assert message["message"] == "Erreur lors du traitement de la demande"
    await communicator.disconnect()
