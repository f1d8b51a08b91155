"""
User Model

Users belong to exactly one organization. The org_id on the user row is
what every request is scoped to.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
from rfpkb.database import Base
import uuid
import enum


class UserRole(str, enum.Enum):
    """
    User roles.

    Signup only creates ADMIN users. MEMBER exists for users added to an
    organization later.
    """
    ADMIN = "admin"
    MEMBER = "member"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    org_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Emails are global: one account signs in to exactly one organization
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)

    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.ADMIN,
        nullable=False
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_login_at = Column(DateTime, nullable=True)

    organization = relationship("Organization", back_populates="users")

    def __repr__(self):
        return f"<User {self.email} (org={self.org_id})>"
