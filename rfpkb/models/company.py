"""
Company Model

Companies are the firms an organization proposes with: itself, partners
and subconsultants.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Index, JSON
from datetime import datetime
from rfpkb.database import Base
from rfpkb.models.status import RecordStatus
import uuid


class Company(Base):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    org_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    services = Column(JSON, nullable=True, default=list)
    dbe = Column(Boolean, nullable=True)  # Disadvantaged Business Enterprise
    mbe = Column(Boolean, nullable=True)  # Minority Business Enterprise
    certifications = Column(JSON, nullable=True, default=list)
    profile = Column(Text, nullable=True)

    status = Column(String(32), default=RecordStatus.DRAFT.value, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_company_org_status', 'org_id', 'status'),
    )

    def __repr__(self):
        return f"<Company {self.name} (org={self.org_id})>"
