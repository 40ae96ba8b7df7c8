# authentication/directory.py
import uuid

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password

from storage.records import get_store, now_ms
from .models import UserRecord

USERS_FILE = "users.json"


class UserDirectory:
    """Users persisted in ``users.json``, looked up by id, email or username."""

    def __init__(self, store=None):
        self.store = store if store is not None else get_store(USERS_FILE)

    def all(self):
        return [UserRecord.from_record(record) for record in self.store.load()]

    def get(self, user_id):
        for user in self.all():
            if user.id == user_id:
                return user
        return None

    def find_by_email(self, email):
        normalized = email.lower().strip()
        for user in self.all():
            if user.email == normalized:
                return user
        return None

    def find_by_username(self, username):
        lowered = username.lower()
        for user in self.all():
            if user.username.lower() == lowered:
                return user
        return None

    def search_by_username(self, query, exclude_user_id, limit=None):
        if limit is None:
            limit = settings.MINDLYST_SEARCH_LIMIT
        lowered = query.lower()
        matches = [
            user for user in self.all()
            if user.id != exclude_user_id and lowered in user.username.lower()
        ]
        return matches[:limit]

    def create(self, email, username, password):
        records = self.store.load()
        user = UserRecord(
            id=str(uuid.uuid4()),
            email=email.lower().strip(),
            username=username.strip(),
            password_hash=make_password(password),
            created_at=now_ms(),
        )
        records.append(user.to_record())
        self.store.save(records)
        return user

    def authenticate(self, email, password):
        user = self.find_by_email(email)
        if user is None or not check_password(password, user.password_hash):
            return None
        return user


def get_user_directory():
    return UserDirectory()
