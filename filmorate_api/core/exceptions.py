"""Domain errors raised by validators, services and repositories.

Each class carries the category string rendered in the error body;
the HTTP status is assigned in ``filmorate_api.api.http_utils``.
"""


class FilmorateError(Exception):
    """Base class for errors surfaced to the client verbatim."""

    category = "Internal server error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FilmorateError):
    category = "Validation error"


class NotFoundError(FilmorateError):
    category = "Not found"


class DuplicatedDataError(FilmorateError):
    category = "Duplicated data"
