"""Typed failures raised by the ledger.

Each error carries a short machine-readable ``reason`` and the HTTP status a
transport layer maps it to.
"""


class LedgerError(Exception):
    """Base class for all ledger failures."""

    reason = "error"
    status = 500

    def to_dict(self) -> dict:
        """Convert the error to a response body."""
        return {"error": self.reason, "message": str(self)}


class ValidationError(LedgerError):
    """Malformed or missing input."""

    reason = "invalid_input"
    status = 400


class NotFoundError(LedgerError):
    """A referenced record does not exist (or is soft-deleted)."""

    reason = "not_found"
    status = 404


class ForbiddenError(LedgerError):
    """The record exists but belongs to another user."""

    reason = "forbidden"
    status = 403


class ConflictError(LedgerError):
    """A uniqueness or reference constraint blocks the write."""

    reason = "conflict"
    status = 409


class StorageError(LedgerError):
    """The underlying database failed.

    The message is always generic; the backend exception is chained as
    ``__cause__`` and logged, never shown to the caller.
    """

    reason = "storage_error"
    status = 500

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)
