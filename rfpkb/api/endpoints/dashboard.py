"""
Dashboard Endpoint
"""
from fastapi import APIRouter, Depends

from rfpkb.api.deps import SessionContext, get_current_session, get_record_store
from rfpkb.schemas.dashboard import DashboardStats
from rfpkb.services.dashboard import collect_stats
from rfpkb.services.record_store import RecordStore

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(
    session: SessionContext = Depends(get_current_session),
    store: RecordStore = Depends(get_record_store)
):
    """Record counts for the caller's organization, per collection and per status."""
    return DashboardStats(**collect_stats(store, session.org_id))
