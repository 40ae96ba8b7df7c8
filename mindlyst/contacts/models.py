# contacts/models.py
from dataclasses import dataclass

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"

STATUSES = (PENDING, ACCEPTED, REJECTED)


@dataclass
class ContactRequest:
    id: str
    requester_id: str
    requester_username: str
    requester_email: str
    recipient_id: str
    status: str
    created_at: int

    @classmethod
    def from_record(cls, record):
        return cls(
            id=record["id"],
            requester_id=record["requesterId"],
            requester_username=record["requesterUsername"],
            requester_email=record["requesterEmail"],
            recipient_id=record["recipientId"],
            status=record["status"],
            created_at=record["createdAt"],
        )

    def to_record(self):
        return {
            "id": self.id,
            "requesterId": self.requester_id,
            "requesterUsername": self.requester_username,
            "requesterEmail": self.requester_email,
            "recipientId": self.recipient_id,
            "status": self.status,
            "createdAt": self.created_at,
        }

    @property
    def is_pending(self):
        return self.status == PENDING

    def __str__(self):
        return f"{self.requester_username} -> {self.recipient_id} ({self.status})"


@dataclass
class Contact:
    id: str
    user_id: str
    contact_user_id: str
    contact_username: str
    contact_email: str
    created_at: int

    @classmethod
    def from_record(cls, record):
        return cls(
            id=record["id"],
            user_id=record["userId"],
            contact_user_id=record["contactUserId"],
            contact_username=record["contactUsername"],
            contact_email=record["contactEmail"],
            created_at=record["createdAt"],
        )

    def to_record(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "contactUserId": self.contact_user_id,
            "contactUsername": self.contact_username,
            "contactEmail": self.contact_email,
            "createdAt": self.created_at,
        }

    def links(self, user_a, user_b):
        return {self.user_id, self.contact_user_id} == {user_a, user_b}

    def __str__(self):
        return f"{self.user_id} -> {self.contact_username}"
