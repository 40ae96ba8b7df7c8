# authentication/models.py
from dataclasses import dataclass

from storage.records import now_ms


@dataclass
class UserRecord:
    id: str
    email: str
    username: str
    password_hash: str
    created_at: int
    is_admin: bool = False

    # DRF permission classes look for these on request.user
    is_authenticated = True
    is_anonymous = False

    @classmethod
    def from_record(cls, record):
        return cls(
            id=record["id"],
            email=record["email"],
            username=record["username"],
            password_hash=record["passwordHash"],
            created_at=record["createdAt"],
            is_admin=record.get("isAdmin", False),
        )

    def to_record(self):
        record = {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at,
        }
        if self.is_admin:
            record["isAdmin"] = True
        return record

    def __str__(self):
        return self.email


@dataclass
class SessionRecord:
    token: str
    user_id: str
    expires_at: int

    @classmethod
    def from_record(cls, record):
        return cls(token=record["token"], user_id=record["userId"], expires_at=record["expiresAt"])

    def to_record(self):
        return {"token": self.token, "userId": self.user_id, "expiresAt": self.expires_at}

    def is_expired(self, now=None):
        return self.expires_at <= (now if now is not None else now_ms())
