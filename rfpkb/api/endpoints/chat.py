"""
Chat Endpoint

Canned-response assistant. Replies come from fixed templates; the
optional context is record data the client (or the server, with
includeRecords) collected for the caller's organization.
"""
from fastapi import APIRouter, Depends

from rfpkb.api.deps import SessionContext, get_current_session, get_record_store
from rfpkb.schemas.chat import ChatRequest, ChatResponse
from rfpkb.services.chat import build_context, generate_reply
from rfpkb.services.record_store import RecordStore
from rfpkb.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    session: SessionContext = Depends(get_current_session),
    store: RecordStore = Depends(get_record_store)
):
    """
    Reply to one chat message.

    orgId in the body is never trusted: context is always built for the
    session's organization.
    """
    if request.org_id and request.org_id != session.org_id:
        log_security_event(
            "cross_tenant_access",
            {"org_id": session.org_id, "user_id": session.user_id, "reason": "chat_org_id"},
            logger
        )

    context = request.context or ""
    if request.include_records:
        context = build_context(store, session.org_id, request.message)

    reply = generate_reply(request.message, context)
    logger.debug(f"Chat reply of {len(reply)} chars", extra={"org_id": session.org_id})
    return ChatResponse(response=reply)
