from abc import ABC


class UserError(ABC, Exception):
    """Base class for errors whose message may be shown to the client.

    Messages must not contain sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested document is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class SequenceExhaustedError(UserError):
    """Raised when every allocation attempt hit a uniqueness conflict.

    The document being created must not be persisted. Clients may retry the
    whole request.
    """

    def __init__(self, document_type: str, attempts_made: int) -> None:
        self.document_type = document_type
        self.attempts_made = attempts_made
        super().__init__(f"Failed to allocate the next {document_type} number after {attempts_made} attempts")


class StoreUnavailableError(Exception):
    """Raised when the counter store fails for any reason other than a uniqueness conflict."""


class ConflictError(UserError):
    """Raised when a new document collides with an existing unique value (name, SKU or number).

    The request can be retried.
    """
