"""
Document Endpoints

Upload stores a text document in the documents bucket; ingest turns a
stored document into an AI-Generated draft record. The web client calls
them in sequence, one file at a time. A failure affects only that file.
"""
import mimetypes

from fastapi import APIRouter, Depends

from rfpkb.api.deps import SessionContext, get_current_session, get_record_store
from rfpkb.config import get_settings
from rfpkb.core.exceptions import InvalidInputError
from rfpkb.schemas.documents import IngestRequest, IngestResponse, UploadRequest, UploadResponse
from rfpkb.services.ingest import build_draft, decode_document
from rfpkb.services.record_store import RecordStore, record_to_dict
from rfpkb.services.storage import DocumentStorage, get_storage
from rfpkb.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

router = APIRouter(tags=["documents"])


@router.post("/upload-file", response_model=UploadResponse)
async def upload_file(
    upload: UploadRequest,
    session: SessionContext = Depends(get_current_session),
    storage: DocumentStorage = Depends(get_storage)
):
    """Store one document and return its storage path."""
    content = upload.file_content.encode("utf-8")
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise InvalidInputError(
            f"File too large: {len(content)} bytes (limit {settings.MAX_UPLOAD_BYTES})"
        )

    path = storage.upload(session.org_id, upload.file_name, content, upload.file_type)
    logger.info(f"Uploaded {upload.file_name} as {path}",
                extra={"org_id": session.org_id, "user_id": session.user_id})
    return UploadResponse(file_path=path)


@router.post("/ingest", response_model=IngestResponse)
async def ingest(
    request: IngestRequest,
    session: SessionContext = Depends(get_current_session),
    store: RecordStore = Depends(get_record_store),
    storage: DocumentStorage = Depends(get_storage)
):
    """
    Create a draft record from an uploaded document.

    The record type is inferred from the text and the record is always
    saved with status AI-Generated.
    """
    data = storage.download(session.org_id, request.file_path)
    mime_type = (
        request.file_type
        or storage.content_type(session.org_id, request.file_path)
        or mimetypes.guess_type(request.file_name)[0]
    )

    draft = build_draft(decode_document(data), mime_type)
    record = store.create(draft.collection, session.org_id, draft.fields)

    logger.info(f"Ingested {request.file_name} into {draft.collection} record {record.id}",
                extra={"org_id": session.org_id, "user_id": session.user_id})
    return IngestResponse(collection=draft.collection, result=record_to_dict(record))
