import pytest
from rest_framework.test import APIClient

from authentication.directory import UserDirectory
from authentication.sessions import SessionStore
from contacts.ledger import ContactLedger, ContactRequestLedger
from storage.records import MemoryStore
from tests.helpers import user_record


@pytest.fixture(autouse=True)
def data_dir(settings, tmp_path):
    path = tmp_path / "data"
    settings.MINDLYST_DATA_DIR = str(path)
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    return path


@pytest.fixture
def directory():
    return UserDirectory(MemoryStore([
        user_record("1", "alice"),
        user_record("2", "bob"),
        user_record("3", "Carol"),
    ]))


@pytest.fixture
def contact_ledger(directory):
    return ContactLedger(directory, MemoryStore())


@pytest.fixture
def request_ledger(directory, contact_ledger):
    return ContactRequestLedger(directory, contact_ledger, MemoryStore())


@pytest.fixture
def make_user():
    """Create a user in the file-backed directory of the current test."""
    def _make_user(username, password="correct-horse"):
        return UserDirectory().create(f"{username}@example.com", username, password)
    return _make_user


@pytest.fixture
def client_for(settings):
    """An APIClient already carrying a session cookie for ``user``."""
    def _client_for(user):
        client = APIClient()
        session = SessionStore().create(user.id)
        client.cookies[settings.MINDLYST_SESSION_COOKIE] = session.token
        return client
    return _client_for
