"""
Account Schemas

Request/response models for signup and login.

Request bodies accept the camelCase keys the web client sends
(orgName) as well as snake_case.
"""
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from rfpkb.models.user import UserRole


class SignupRequest(BaseModel):
    """Signup creates an organization and its first (admin) user."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    org_name: str = Field(..., alias="orgName", min_length=1, max_length=255)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "email": "owner@example.com",
                "password": "securepassword123",
                "orgName": "Acme Engineering"
            }
        }


class LoginRequest(BaseModel):
    """Login request body."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"


class OrganizationResponse(BaseModel):
    id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """User response schema (excludes the password hash)."""
    id: str
    email: str
    org_id: str
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True


class SignupResponse(BaseModel):
    success: bool = True
    user: UserResponse
    organization: OrganizationResponse
    access_token: str
    token_type: str = "bearer"
