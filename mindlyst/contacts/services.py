# contacts/services.py
from authentication.directory import get_user_directory
from .ledger import ContactLedger, ContactRequestLedger


def get_ledgers():
    directory = get_user_directory()
    contacts = ContactLedger(directory)
    return ContactRequestLedger(directory, contacts), contacts


def create_contact_request(requester_id, recipient_id):
    requests, _ = get_ledgers()
    return requests.create(requester_id, recipient_id)


def accept_contact_request(request_id, user_id):
    requests, _ = get_ledgers()
    return requests.accept(request_id, user_id)


def reject_contact_request(request_id, user_id):
    requests, _ = get_ledgers()
    return requests.reject(request_id, user_id)


def get_contact_request(request_id):
    requests, _ = get_ledgers()
    return requests.get(request_id)


def get_pending_contact_requests(user_id):
    requests, _ = get_ledgers()
    return requests.list_pending(user_id)


def get_sent_contact_requests(user_id):
    requests, _ = get_ledgers()
    return requests.list_sent(user_id)


def get_user_contacts(user_id):
    _, contacts = get_ledgers()
    return contacts.list_for_user(user_id)


def add_contact(user_id, contact_user_id):
    _, contacts = get_ledgers()
    return contacts.add_contact(user_id, contact_user_id)


def remove_contact(user_id, contact_id):
    _, contacts = get_ledgers()
    return contacts.remove(user_id, contact_id)


def find_user_by_username(username):
    return get_user_directory().find_by_username(username)


def search_users_by_username(query, exclude_user_id):
    return get_user_directory().search_by_username(query, exclude_user_id)
