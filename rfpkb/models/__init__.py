"""
Database Models

Every record table carries org_id for multi-tenant isolation.
"""
from rfpkb.models.status import RecordStatus
from rfpkb.models.organization import Organization
from rfpkb.models.user import User, UserRole
from rfpkb.models.company import Company
from rfpkb.models.person import Person
from rfpkb.models.project import Project

__all__ = ["RecordStatus", "Organization", "User", "UserRole", "Company", "Person", "Project"]
