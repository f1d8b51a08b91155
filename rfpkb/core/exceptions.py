"""
Custom Exceptions

Centralized exception definitions for better error handling.
FastAPI converts these to HTTP responses; rfpkb.main adds a "type"
field so clients can tell them apart.
"""
from fastapi import HTTPException, status


class RecordNotFoundError(HTTPException):
    """
    Raised when a record cannot be found.

    Also raised for records owned by another organization, with the same
    message, so callers cannot discover ids outside their tenant.
    """

    error_type = "not_found"

    def __init__(self, collection: str = "record", record_id: str = ""):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{collection} not found: {record_id}" if record_id else f"{collection} not found"
        )


class AuthenticationError(HTTPException):
    """Raised when authentication fails."""

    error_type = "authentication_error"

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidInputError(HTTPException):
    """Raised when input validation fails (missing field, unknown collection)."""

    error_type = "validation_error"

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )


class DuplicateAccountError(HTTPException):
    """Raised on signup with an email that already has an account."""

    error_type = "duplicate_account"

    def __init__(self, email: str = ""):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"An account already exists for {email}" if email else "Account already exists"
        )


class UpstreamError(HTTPException):
    """
    Raised when a backing service (database, object storage) fails.

    Not retried. The request fails and the process keeps serving.
    """

    error_type = "upstream_error"

    def __init__(self, detail: str = "Backend request failed"):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail
        )
