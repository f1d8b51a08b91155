"""
Record Schemas

Request/response models for companies, people and projects.

Write schemas are used for both create and full-row update, so every
field is optional: on update, a field left out is stored as null.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from rfpkb.database import BIGINT_MAX, INT_MAX
from rfpkb.models import RecordStatus


class CompanyWrite(BaseModel):
    """Schema for creating or replacing a company."""
    name: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    services: Optional[List[str]] = None
    dbe: Optional[bool] = None
    mbe: Optional[bool] = None
    certifications: Optional[List[str]] = None
    profile: Optional[str] = None
    status: Optional[RecordStatus] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme Corp",
                "location": "Denver, CO",
                "services": ["Civil Engineering", "Surveying"],
                "dbe": True,
                "mbe": False,
                "certifications": ["ISO 9001"],
                "status": "Draft"
            }
        }


class PersonWrite(BaseModel):
    """Schema for creating or replacing a person."""
    company_id: Optional[str] = None
    name: Optional[str] = Field(None, max_length=255)
    title: Optional[str] = Field(None, max_length=255)
    years: Optional[int] = Field(None, ge=0, le=INT_MAX)
    education: Optional[str] = None
    licenses: Optional[List[str]] = None
    specialties: Optional[List[str]] = None
    resume: Optional[str] = None
    bio_short: Optional[str] = None
    bio_medium: Optional[str] = None
    bio_long: Optional[str] = None
    status: Optional[RecordStatus] = None


class ProjectWrite(BaseModel):
    """Schema for creating or replacing a project."""
    name: Optional[str] = Field(None, max_length=255)
    client: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    start_date: Optional[str] = Field(None, max_length=32)
    end_date: Optional[str] = Field(None, max_length=32)
    value: Optional[int] = Field(None, ge=0, le=BIGINT_MAX)
    funding: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    services: Optional[List[str]] = None
    description: Optional[str] = None
    outcome: Optional[str] = None
    status: Optional[RecordStatus] = None


class RecordMeta(BaseModel):
    """Columns every stored record has."""
    id: str
    org_id: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CompanyResponse(RecordMeta, CompanyWrite):
    status: str


class PersonResponse(RecordMeta, PersonWrite):
    status: str


class ProjectResponse(RecordMeta, ProjectWrite):
    status: str


class CompanyListResponse(BaseModel):
    records: list[CompanyResponse]
    total: int


class PersonListResponse(BaseModel):
    records: list[PersonResponse]
    total: int


class ProjectListResponse(BaseModel):
    records: list[ProjectResponse]
    total: int
