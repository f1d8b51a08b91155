"""
Organization Model

The organization is the tenant: the isolation boundary for all records.
One organization is created per signup, together with its admin user.
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from rfpkb.database import Base
import uuid


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    # Records are removed with their organization; nothing else cascades
    users = relationship("User", back_populates="organization", cascade="all, delete-orphan")
    companies = relationship("Company", cascade="all, delete-orphan")
    people = relationship("Person", cascade="all, delete-orphan")
    projects = relationship("Project", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Organization {self.name} ({self.id})>"
