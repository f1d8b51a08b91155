"""
API Dependencies

Reusable FastAPI dependencies for authentication and data access.

The signed-in user is never held in global state. Each request resolves
an explicit SessionContext from its bearer token, and handlers pass
session.org_id to the record store.
"""
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from rfpkb.database import get_db
from rfpkb.models.user import User
from rfpkb.core.security import read_session_token
from rfpkb.core.exceptions import AuthenticationError
from rfpkb.services.record_store import RecordStore
from rfpkb.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

# auto_error=False so a missing header is a 401 like any other bad token
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """The authenticated user and the organization every query is scoped to."""
    user: User
    org_id: str

    @property
    def user_id(self) -> str:
        return self.user.id


def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> SessionContext:
    """
    Resolve the request's session.

    This dependency:
    1. Validates the JWT
    2. Loads the user
    3. Checks the token's org_id still matches the user's organization
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    claims = read_session_token(credentials.credentials)
    if not claims:
        log_security_event("invalid_token", {"reason": "decode_failed"}, logger)
        raise AuthenticationError("Invalid or expired token")

    user = db.query(User).filter(User.id == claims.user_id).first()
    if not user:
        logger.warning(f"Token for unknown user: {claims.user_id}")
        raise AuthenticationError("User not found")

    if user.org_id != claims.org_id:
        log_security_event(
            "invalid_token",
            {"reason": "org_mismatch", "user_id": user.id, "org_id": user.org_id},
            logger
        )
        raise AuthenticationError("Invalid token payload")

    return SessionContext(user=user, org_id=user.org_id)


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    """Tenant-scoped record accessor bound to the request's session."""
    return RecordStore(db)
