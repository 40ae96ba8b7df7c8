# contacts/ledger.py
"""Contact requests and the directional contact edges they produce.

Both ledgers persist through a :class:`storage.records.RecordStore` with
whole-document read-modify-write and no locking, so the duplicate checks
below are check-then-act and only hold for a single writer.
"""
import uuid

from storage.records import get_store, now_ms
from .exceptions import (
    DuplicateContactError,
    DuplicateRequestError,
    RequestNotFoundError,
    SelfReferenceError,
    UserNotFoundError,
)
from .models import ACCEPTED, PENDING, REJECTED, Contact, ContactRequest

CONTACTS_FILE = "contacts.json"
CONTACT_REQUESTS_FILE = "contact-requests.json"


class ContactLedger:
    def __init__(self, directory, store=None):
        self.directory = directory
        self.store = store if store is not None else get_store(CONTACTS_FILE)

    def _load(self):
        return [Contact.from_record(record) for record in self.store.load()]

    def _save(self, contacts):
        self.store.save([contact.to_record() for contact in contacts])

    def _new_edge(self, owner_id, other):
        return Contact(
            id=str(uuid.uuid4()),
            user_id=owner_id,
            contact_user_id=other.id,
            contact_username=other.username,
            contact_email=other.email,
            created_at=now_ms(),
        )

    def list_for_user(self, user_id):
        return [contact for contact in self._load() if contact.user_id == user_id]

    def find_between(self, user_a, user_b):
        """First edge linking the two users in either direction, or None."""
        for contact in self._load():
            if contact.links(user_a, user_b):
                return contact
        return None

    def materialize_acceptance(self, requester_id, recipient_id):
        """Append the two directional edges of an accepted request.

        Returns ``(requester_edge, recipient_edge)``. Calling this twice for the
        same pair appends two more edges; the request state machine is what
        guarantees a single call per acceptance.
        """
        requester = self.directory.get(requester_id)
        recipient = self.directory.get(recipient_id)
        if requester is None or recipient is None:
            raise UserNotFoundError()

        contacts = self._load()
        requester_edge = self._new_edge(requester_id, recipient)
        recipient_edge = self._new_edge(recipient_id, requester)
        contacts.extend([requester_edge, recipient_edge])
        self._save(contacts)
        return requester_edge, recipient_edge

    def add_contact(self, user_id, contact_user_id):
        """Legacy single-edge insert, idempotent on (user_id, contact_user_id)."""
        contacts = self._load()
        for contact in contacts:
            if contact.user_id == user_id and contact.contact_user_id == contact_user_id:
                return contact

        if user_id == contact_user_id:
            raise SelfReferenceError()

        other = self.directory.get(contact_user_id)
        if other is None:
            raise UserNotFoundError()

        contact = self._new_edge(user_id, other)
        contacts.append(contact)
        self._save(contacts)
        return contact

    def remove(self, user_id, contact_id):
        """Delete the edge ``contact_id`` if ``user_id`` owns it; report whether it did."""
        contacts = self._load()
        remaining = [c for c in contacts if not (c.id == contact_id and c.user_id == user_id)]
        if len(remaining) == len(contacts):
            return False
        self._save(remaining)
        return True


class ContactRequestLedger:
    def __init__(self, directory, contacts, store=None):
        self.directory = directory
        self.contacts = contacts
        self.store = store if store is not None else get_store(CONTACT_REQUESTS_FILE)

    def _load(self):
        return [ContactRequest.from_record(record) for record in self.store.load()]

    def _save(self, requests):
        self.store.save([request.to_record() for request in requests])

    def _find_actionable(self, requests, request_id, acting_user_id):
        for request in requests:
            if request.id == request_id and request.recipient_id == acting_user_id and request.is_pending:
                return request
        raise RequestNotFoundError()

    def get(self, request_id):
        for request in self._load():
            if request.id == request_id:
                return request
        return None

    def create(self, requester_id, recipient_id):
        if requester_id == recipient_id:
            raise SelfReferenceError()

        if self.contacts.find_between(requester_id, recipient_id) is not None:
            raise DuplicateContactError()

        requests = self._load()
        # Only the requester -> recipient direction is checked; a pending
        # request the other way does not block this one.
        for request in requests:
            if (request.requester_id == requester_id and request.recipient_id == recipient_id
                    and request.is_pending):
                raise DuplicateRequestError()

        requester = self.directory.get(requester_id)
        if requester is None:
            raise UserNotFoundError()

        request = ContactRequest(
            id=str(uuid.uuid4()),
            requester_id=requester_id,
            requester_username=requester.username,
            requester_email=requester.email,
            recipient_id=recipient_id,
            status=PENDING,
            created_at=now_ms(),
        )
        requests.append(request)
        self._save(requests)
        return request

    def accept(self, request_id, acting_user_id):
        """Accept a pending request addressed to ``acting_user_id``.

        Returns the new edge owned by the accepting user. The edges are written
        before the status so an unknown participant leaves both documents
        untouched.
        """
        requests = self._load()
        request = self._find_actionable(requests, request_id, acting_user_id)
        _, recipient_edge = self.contacts.materialize_acceptance(request.requester_id, request.recipient_id)
        request.status = ACCEPTED
        self._save(requests)
        return recipient_edge

    def reject(self, request_id, acting_user_id):
        requests = self._load()
        request = self._find_actionable(requests, request_id, acting_user_id)
        request.status = REJECTED
        self._save(requests)
        return request

    def list_pending(self, user_id):
        return [r for r in self._load() if r.recipient_id == user_id and r.is_pending]

    def list_sent(self, user_id):
        return [r for r in self._load() if r.requester_id == user_id and r.is_pending]
