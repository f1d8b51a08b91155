"""
Person Model

Key personnel whose resumes and bios get reused across proposals.

The three bio columns are edited independently; they are not derived
from each other once stored.
"""
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, Index, JSON
from datetime import datetime
from rfpkb.database import Base
from rfpkb.models.status import RecordStatus
import uuid


class Person(Base):
    __tablename__ = "people"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    org_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Employer, if known. Deleting the company keeps the person.
    company_id = Column(
        String(36),
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    name = Column(String(255), nullable=True)
    title = Column(String(255), nullable=True)
    years = Column(Integer, nullable=True)
    education = Column(Text, nullable=True)
    licenses = Column(JSON, nullable=True, default=list)
    specialties = Column(JSON, nullable=True, default=list)
    resume = Column(Text, nullable=True)
    bio_short = Column(Text, nullable=True)
    bio_medium = Column(Text, nullable=True)
    bio_long = Column(Text, nullable=True)

    status = Column(String(32), default=RecordStatus.DRAFT.value, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_person_org_status', 'org_id', 'status'),
    )

    def __repr__(self):
        return f"<Person {self.name} (org={self.org_id})>"
