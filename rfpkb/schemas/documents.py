"""
Document Schemas

Request/response models for file upload and ingest.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class UploadRequest(BaseModel):
    """Upload of one text document."""
    file_name: str = Field(..., alias="fileName", min_length=1, max_length=255)
    file_content: str = Field(..., alias="fileContent", min_length=1)
    file_type: Optional[str] = Field(None, alias="fileType", max_length=100)

    class Config:
        populate_by_name = True


class UploadResponse(BaseModel):
    success: bool = True
    file_path: str = Field(..., serialization_alias="filePath")


class IngestRequest(BaseModel):
    """Turn a previously uploaded file into a draft record."""
    file_path: str = Field(..., alias="filePath", min_length=1)
    file_name: str = Field(..., alias="fileName", min_length=1)
    file_type: Optional[str] = Field(None, alias="fileType")

    class Config:
        populate_by_name = True


class IngestResponse(BaseModel):
    success: bool = True
    collection: str
    result: Dict[str, Any]
