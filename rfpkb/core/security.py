"""
Credentials and session tokens

Passwords are stored as bcrypt hashes (passlib). A successful signup or
login issues a signed session token (python-jose) naming the user and the
organization the user belonged to at issue time.

deps.get_current_session compares the token's organization with the user
row on every request, so a token stops working once the user is moved or
deleted.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from rfpkb.config import get_settings

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class SessionClaims:
    """What a valid session token asserts."""
    user_id: str
    org_id: str
    email: Optional[str] = None


def hash_password(password: str) -> str:
    # bcrypt is slow on purpose; signup is the only caller
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def issue_session_token(claims: SessionClaims, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token for claims, valid for ACCESS_TOKEN_EXPIRE_MINUTES by default."""
    issued_at = datetime.utcnow()
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": claims.user_id,
        "org_id": claims.org_id,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    if claims.email:
        payload["email"] = claims.email

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def read_session_token(token: str) -> Optional[SessionClaims]:
    """
    Verify a token and return its claims.

    Returns None for a bad signature, an expired token, or a payload
    without both a user and an organization.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    user_id = payload.get("sub")
    org_id = payload.get("org_id")
    if not user_id or not org_id:
        return None
    return SessionClaims(user_id=user_id, org_id=org_id, email=payload.get("email"))
