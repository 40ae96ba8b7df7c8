# contacts/exceptions.py
from rest_framework import status


class ContactError(Exception):
    """Base class for refused contact operations.

    ``status_code`` is the HTTP status the route layer answers with.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Opération impossible"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class SelfReferenceError(ContactError):
    default_message = "Tu ne peux pas t'ajouter toi-même comme contact"


class DuplicateContactError(ContactError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Ce contact existe déjà"


class DuplicateRequestError(ContactError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Une demande est déjà en attente"


class UserNotFoundError(ContactError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Utilisateur non trouvé"


class RequestNotFoundError(ContactError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Demande non trouvée ou déjà traitée"
