"""
Authentication Endpoints

Signup creates an organization together with its first user, who is
always an admin. Login exchanges credentials for a bearer token.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import datetime

from rfpkb.database import get_db
from rfpkb.models import Organization, User, UserRole
from rfpkb.schemas.auth import (
    LoginRequest,
    OrganizationResponse,
    SignupRequest,
    SignupResponse,
    Token,
    UserResponse
)
from rfpkb.core.security import SessionClaims, hash_password, issue_session_token, verify_password
from rfpkb.core.exceptions import AuthenticationError, DuplicateAccountError, UpstreamError
from rfpkb.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

router = APIRouter(tags=["authentication"])


def _issue_token(user: User) -> str:
    return issue_session_token(SessionClaims(user_id=user.id, org_id=user.org_id, email=user.email))


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    registration: SignupRequest,
    db: Session = Depends(get_db)
):
    """
    Create an organization and its admin user.

    Both rows are written in one transaction, so a failed signup leaves
    no orphaned organization behind.
    """
    email = registration.email.lower()

    if db.query(User).filter(User.email == email).first():
        raise DuplicateAccountError(email)

    organization = Organization(name=registration.org_name)
    db.add(organization)
    db.flush()  # Assigns organization.id

    user = User(
        email=email,
        hashed_password=hash_password(registration.password),
        org_id=organization.id,
        role=UserRole.ADMIN,
    )
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        db.rollback()
        raise DuplicateAccountError(email)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Signup failed: {e}")
        raise UpstreamError("Failed to create account")

    db.refresh(organization)
    db.refresh(user)

    logger.info(f"New organization {organization.id} created by {user.id}",
                extra={"org_id": organization.id, "user_id": user.id})

    return SignupResponse(
        user=UserResponse.model_validate(user),
        organization=OrganizationResponse.model_validate(organization),
        access_token=_issue_token(user),
    )


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT token.

    Unknown email and wrong password produce the same error.
    """
    email = credentials.email.lower()
    user = db.query(User).filter(User.email == email).first()

    if not user:
        log_security_event("failed_login", {"reason": "user_not_found", "email": email}, logger)
        raise AuthenticationError("Invalid credentials")

    if not verify_password(credentials.password, user.hashed_password):
        log_security_event(
            "failed_login",
            {"reason": "invalid_password", "user_id": user.id, "org_id": user.org_id},
            logger
        )
        raise AuthenticationError("Invalid credentials")

    user.last_login_at = datetime.utcnow()
    db.commit()

    logger.info(f"Successful login: user={user.id}, org={user.org_id}")

    return Token(access_token=_issue_token(user))
