"""Custom exception classes for the ledger API.

Each exception carries an error_code from the catalog in errors.py and the
HTTP status the error handler should answer with.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all expected (non-internal) failures.

    Attributes:
        error_code: Code from the error catalog (e.g., "TXN_001")
        details: Additional context about the error (for logging only)
        http_status: HTTP status code to return (default: 500)
    """

    default_code = "SYS_001"
    default_status = 500

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(self.error_code)


class ValidationError(LedgerError):
    """Raised when required fields are missing or malformed."""

    default_code = "VAL_001"
    default_status = 400


class UnauthorizedError(LedgerError):
    """Raised when a credential is missing, invalid or expired.

    Also used for failed logins, so unknown emails and wrong passwords
    look the same to the caller.
    """

    default_code = "AUTH_002"
    default_status = 401


class ConflictError(LedgerError):
    """Raised when an account email is already registered."""

    default_code = "USER_001"
    default_status = 409


class NotFoundError(LedgerError):
    """Raised when a record is absent or owned by someone else.

    The two cases are deliberately indistinguishable.
    """

    default_code = "TXN_001"
    default_status = 404
