"""
Chat Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    # Record snapshots assembled by the client, passed through verbatim
    context: Optional[str] = None
    # Accepted for compatibility; the session's organization is always used
    org_id: Optional[str] = Field(None, alias="orgId")
    # Build the context server-side from the caller's records
    include_records: bool = Field(False, alias="includeRecords")

    class Config:
        populate_by_name = True


class ChatResponse(BaseModel):
    response: str
