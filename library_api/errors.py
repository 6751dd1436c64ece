"""Failure kinds raised by the business-rule layer.

Routers never build error responses themselves: they let these exceptions
propagate and the handlers registered in ``main.py`` translate them to HTTP.
"""


class LibraryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidError(LibraryError):
    """The payload or its field values break a static or cross-field rule."""

    status_code = 400


class NotFoundError(LibraryError):
    """A referenced entity (by primary or foreign key) does not exist."""

    status_code = 404


class ConflictError(LibraryError):
    """The operation would break a uniqueness or referential rule."""

    status_code = 409


class DuplicateError(ConflictError):
    pass


class StoreError(LibraryError):
    """The store rejected a write for a reason the rules did not anticipate."""

    status_code = 500
