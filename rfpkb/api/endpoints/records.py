"""
Record Endpoints

CRUD for the three record collections. The handlers are identical apart
from their schemas, so one router per collection is built from a
template:

    GET    /records/{collection}          list, with search and status filter
    POST   /records/{collection}          create (status defaults to Draft)
    GET    /records/{collection}/{id}     detail
    PUT    /records/{collection}/{id}     full-row overwrite
    DELETE /records/{collection}/{id}     immediate hard delete

TENANT_ISOLATION: every handler goes through RecordStore with the
session's org_id. Records of other organizations answer 404.
"""
from fastapi import APIRouter, Depends, Query, status
from typing import Optional, Type
from pydantic import BaseModel

from rfpkb.api.deps import SessionContext, get_current_session, get_record_store
from rfpkb.schemas.records import (
    CompanyListResponse,
    CompanyResponse,
    CompanyWrite,
    PersonListResponse,
    PersonResponse,
    PersonWrite,
    ProjectListResponse,
    ProjectResponse,
    ProjectWrite,
)
from rfpkb.services.record_store import RecordStore, filter_records
from rfpkb.utils.logging import get_logger

logger = get_logger(__name__)

STATUS_FILTER_PATTERN = "^(all|Draft|AI-Generated|Purely Verified|Client Verified)$"


def build_router(
    collection: str,
    write_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
    list_schema: Type[BaseModel],
) -> APIRouter:
    """Build the CRUD router for one collection."""
    router = APIRouter(prefix=f"/records/{collection}", tags=[collection])

    @router.get("", response_model=list_schema, name=f"list_{collection}")
    async def list_records(
        search: Optional[str] = Query(None, max_length=255),
        status_filter: Optional[str] = Query(None, alias="status", pattern=STATUS_FILTER_PATTERN),
        session: SessionContext = Depends(get_current_session),
        store: RecordStore = Depends(get_record_store)
    ):
        """
        List the organization's records.

        search is a case-insensitive substring match on the collection's
        headline fields; status is an exact match ("all" disables it).
        """
        records = store.list(collection, session.org_id)
        records = filter_records(collection, records, search=search, status=status_filter)
        return list_schema(
            records=[response_schema.model_validate(r) for r in records],
            total=len(records)
        )

    @router.post("", response_model=response_schema, status_code=status.HTTP_201_CREATED,
                 name=f"create_{collection}")
    async def create_record(
        payload: write_schema,
        session: SessionContext = Depends(get_current_session),
        store: RecordStore = Depends(get_record_store)
    ):
        """Manually add a record."""
        record = store.create(collection, session.org_id, payload.model_dump(exclude_unset=True))
        logger.info(f"{collection} record {record.id} created by {session.user_id}")
        return record

    @router.get("/{record_id}", response_model=response_schema, name=f"get_{collection}")
    async def get_record(
        record_id: str,
        session: SessionContext = Depends(get_current_session),
        store: RecordStore = Depends(get_record_store)
    ):
        return store.get(collection, session.org_id, record_id)

    @router.put("/{record_id}", response_model=response_schema, name=f"replace_{collection}")
    async def replace_record(
        record_id: str,
        payload: write_schema,
        session: SessionContext = Depends(get_current_session),
        store: RecordStore = Depends(get_record_store)
    ):
        """
        Save the detail form.

        This overwrites the whole row: any field not sent is cleared.
        """
        record = store.update(collection, session.org_id, record_id, payload.model_dump())
        logger.info(f"{collection} record {record_id} saved by {session.user_id}")
        return record

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, name=f"delete_{collection}")
    async def delete_record(
        record_id: str,
        session: SessionContext = Depends(get_current_session),
        store: RecordStore = Depends(get_record_store)
    ):
        """Delete immediately. There is no undo."""
        store.delete(collection, session.org_id, record_id)
        logger.info(f"{collection} record {record_id} deleted by {session.user_id}")
        return None

    return router


routers = [
    build_router("companies", CompanyWrite, CompanyResponse, CompanyListResponse),
    build_router("people", PersonWrite, PersonResponse, PersonListResponse),
    build_router("projects", ProjectWrite, ProjectResponse, ProjectListResponse),
]
