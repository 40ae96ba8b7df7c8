# authentication/sessions.py
import secrets

from django.conf import settings

from storage.records import get_store, now_ms
from .models import SessionRecord

SESSIONS_FILE = "sessions.json"


class SessionStore:
    """Opaque session tokens persisted in ``sessions.json``.

    Expired sessions are dropped from the document whenever it is read.
    """

    def __init__(self, store=None, max_age=None):
        self.store = store if store is not None else get_store(SESSIONS_FILE)
        self.max_age = max_age if max_age is not None else settings.MINDLYST_SESSION_MAX_AGE

    def _active(self):
        records = self.store.load()
        now = now_ms()
        sessions = [SessionRecord.from_record(record) for record in records]
        active = [session for session in sessions if not session.is_expired(now)]
        if len(active) != len(sessions):
            self.store.save([session.to_record() for session in active])
        return active

    def get(self, token):
        for session in self._active():
            if session.token == token:
                return session
        return None

    def create(self, user_id):
        session = SessionRecord(
            token=secrets.token_hex(32),
            user_id=user_id,
            expires_at=now_ms() + self.max_age * 1000,
        )
        sessions = self._active()
        sessions.append(session)
        self.store.save([s.to_record() for s in sessions])
        return session

    def delete(self, token):
        sessions = [s for s in self._active() if s.token != token]
        self.store.save([s.to_record() for s in sessions])


def get_session_store():
    return SessionStore()
