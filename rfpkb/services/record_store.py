"""
Tenant-Scoped Record Store

The single accessor for the three record collections (companies, people,
projects). Every query built here carries an org_id predicate; handlers
never query record tables directly.

A record owned by another organization is indistinguishable from a
missing one: both raise RecordNotFoundError with the same message.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from sqlalchemy import BigInteger, Integer, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rfpkb.database import BIGINT_MAX, INT_MAX, Base
from rfpkb.models import Company, Person, Project, RecordStatus
from rfpkb.core.exceptions import InvalidInputError, RecordNotFoundError, UpstreamError
from rfpkb.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Collection:
    """A record collection: its table and the fields the list view searches."""
    name: str
    label: str
    model: Type[Base]
    search_fields: Tuple[str, ...]

    @property
    def writable_fields(self) -> List[str]:
        """Columns a create/update payload may set."""
        return [
            column.name for column in self.model.__table__.columns
            if column.name not in PROTECTED_FIELDS
        ]


# Managed by the store, never taken from a payload
PROTECTED_FIELDS = frozenset({"id", "org_id", "created_at", "updated_at"})

COLLECTIONS: Dict[str, Collection] = {
    "companies": Collection("companies", "Companies", Company, ("name", "location")),
    "people": Collection("people", "People", Person, ("name", "title")),
    "projects": Collection("projects", "Projects", Project, ("name", "client")),
}


def get_collection(name: str) -> Collection:
    """Look up a collection by name, raising InvalidInputError if unknown."""
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise InvalidInputError(
            f"Unknown collection '{name}'. Expected one of: {', '.join(COLLECTIONS)}"
        )


def _integer_limit(column) -> Optional[int]:
    # BigInteger subclasses Integer, so check it first
    if isinstance(column.type, BigInteger):
        return BIGINT_MAX
    if isinstance(column.type, Integer):
        return INT_MAX
    return None


def record_to_dict(record: Base) -> Dict[str, Any]:
    """Plain dict of a record's columns, suitable for JSON context snapshots."""
    data = {}
    for column in record.__table__.columns:
        value = getattr(record, column.name)
        if isinstance(value, datetime):
            value = value.isoformat()
        data[column.name] = value
    return data


def filter_records(
    collection: str,
    records: Iterable[Base],
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Base]:
    """
    Apply the list view's search box and status dropdown.

    search matches case-insensitively as a substring of any of the
    collection's search fields. status is an exact match; None or "all"
    disables it. Records without a status count as Draft.
    """
    meta = get_collection(collection)
    term = (search or "").strip().lower()
    wanted = None if status in (None, "", "all") else RecordStatus.coerce(status).value

    matches = []
    for record in records:
        if term:
            values = (getattr(record, field) or "" for field in meta.search_fields)
            if not any(term in str(value).lower() for value in values):
                continue
        if wanted and RecordStatus.coerce(record.status).value != wanted:
            continue
        matches.append(record)
    return matches


class RecordStore:
    """
    CRUD over companies, people and projects for one database session.

    All methods take the acting org_id explicitly. There is no way to
    read or write a record without one.
    """

    def __init__(self, db: Session):
        self.db = db

    def _scoped(self, meta: Collection, org_id: str):
        return self.db.query(meta.model).filter(meta.model.org_id == org_id)

    def _clean_fields(self, meta: Collection, fields: Mapping[str, Any]) -> Dict[str, Any]:
        writable = set(meta.writable_fields)
        unknown = [key for key in fields if key not in writable and key not in PROTECTED_FIELDS]
        if unknown:
            raise InvalidInputError(
                f"Unknown field(s) for {meta.name}: {', '.join(sorted(unknown))}"
            )
        cleaned = {key: value for key, value in fields.items() if key in writable}
        for key, value in cleaned.items():
            limit = _integer_limit(meta.model.__table__.columns[key])
            if limit and isinstance(value, int) and not -limit - 1 <= value <= limit:
                raise InvalidInputError(f"Value out of range for {meta.name}.{key}: {value}")
        try:
            cleaned["status"] = RecordStatus.coerce(cleaned.get("status")).value
        except ValueError:
            raise InvalidInputError(f"Invalid status: {cleaned.get('status')}")
        return cleaned

    def _check_references(self, meta: Collection, org_id: str, values: Mapping[str, Any]):
        # A person may only point at a company of the same organization
        company_id = values.get("company_id")
        if meta.name == "people" and company_id:
            self.get("companies", org_id, company_id)

    def _commit(self, action: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error during {action}: {e}")
            raise UpstreamError(f"Failed to {action}")

    def list(
        self,
        collection: str,
        org_id: str,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Base]:
        """List an organization's records, newest change first."""
        meta = get_collection(collection)
        query = self._scoped(meta, org_id)

        for field, value in (filters or {}).items():
            if field not in meta.model.__table__.columns:
                raise InvalidInputError(f"Cannot filter {meta.name} by '{field}'")
            query = query.filter(getattr(meta.model, field) == value)

        query = query.order_by(meta.model.updated_at.desc())
        if limit:
            query = query.limit(limit)

        records = query.all()
        logger.debug(f"Listed {len(records)} {meta.name} for org {org_id}")
        return records

    def get(self, collection: str, org_id: str, record_id: str) -> Base:
        """Fetch one record. Missing and foreign records both raise RecordNotFoundError."""
        meta = get_collection(collection)
        record = self._scoped(meta, org_id).filter(meta.model.id == record_id).first()
        if not record:
            raise RecordNotFoundError(meta.name, record_id)
        return record

    def create(self, collection: str, org_id: str, fields: Mapping[str, Any]) -> Base:
        """Insert a record for org_id. id and org_id in fields are ignored."""
        meta = get_collection(collection)
        values = self._clean_fields(meta, fields)
        self._check_references(meta, org_id, values)

        record = meta.model(org_id=org_id, **values)
        record.updated_at = datetime.utcnow()
        self.db.add(record)
        self._commit(f"create {meta.name} record")
        self.db.refresh(record)

        logger.info(
            f"Created {meta.name} record {record.id} (status={record.status})",
            extra={"org_id": org_id, "collection": meta.name, "record_id": record.id}
        )
        return record

    def update(self, collection: str, org_id: str, record_id: str, fields: Mapping[str, Any]) -> Base:
        """
        Overwrite every writable column of a record.

        Columns missing from fields are reset to null and status falls
        back to Draft. This is a replace, not a patch.
        """
        meta = get_collection(collection)
        record = self.get(collection, org_id, record_id)
        values = self._clean_fields(meta, fields)
        self._check_references(meta, org_id, values)

        for field in meta.writable_fields:
            setattr(record, field, values.get(field))
        record.updated_at = datetime.utcnow()

        self._commit(f"update {meta.name} record")
        self.db.refresh(record)

        logger.info(
            f"Updated {meta.name} record {record.id}",
            extra={"org_id": org_id, "collection": meta.name, "record_id": record.id}
        )
        return record

    def delete(self, collection: str, org_id: str, record_id: str) -> None:
        """Hard delete. There is no undo."""
        meta = get_collection(collection)
        record = self.get(collection, org_id, record_id)
        self.db.delete(record)
        self._commit(f"delete {meta.name} record")

        logger.info(
            f"Deleted {meta.name} record {record_id}",
            extra={"org_id": org_id, "collection": meta.name, "record_id": record_id}
        )

    def count(self, collection: str, org_id: str, status: Optional[str] = None) -> int:
        """Count an organization's records, optionally with one status."""
        meta = get_collection(collection)
        query = self.db.query(func.count(meta.model.id)).filter(meta.model.org_id == org_id)
        if status is not None:
            query = query.filter(meta.model.status == RecordStatus.coerce(status).value)
        return query.scalar() or 0
