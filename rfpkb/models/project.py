"""
Project Model

Past performance: projects an organization has delivered and can cite
in proposals.
"""
from sqlalchemy import Column, String, Text, BigInteger, DateTime, ForeignKey, Index, JSON
from datetime import datetime
from rfpkb.database import Base
from rfpkb.models.status import RecordStatus
import uuid


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    org_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(255), nullable=True)
    client = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    # Dates are kept as entered (ISO strings from the form)
    start_date = Column(String(32), nullable=True)
    end_date = Column(String(32), nullable=True)
    value = Column(BigInteger, nullable=True)  # Whole currency units
    funding = Column(String(255), nullable=True)
    type = Column(String(100), nullable=True)
    services = Column(JSON, nullable=True, default=list)
    description = Column(Text, nullable=True)
    outcome = Column(Text, nullable=True)

    status = Column(String(32), default=RecordStatus.DRAFT.value, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_project_org_status', 'org_id', 'status'),
        Index('idx_project_org_client', 'org_id', 'client'),
    )

    def __repr__(self):
        return f"<Project {self.name} (org={self.org_id})>"
