"""
Dashboard aggregation

Per-collection totals and per-status totals for one organization.
Issues one count query per collection and one per (collection, status)
pair. Nothing is cached.
"""
from typing import Dict

from rfpkb.models import RecordStatus
from rfpkb.services.record_store import COLLECTIONS, RecordStore


def collect_stats(store: RecordStore, org_id: str) -> Dict[str, Dict[str, int]]:
    """
    Returns {"totals": {collection: n}, "by_status": {status: n}}.

    Status totals are summed across companies, people and projects.
    """
    totals = {name: store.count(name, org_id) for name in COLLECTIONS}

    by_status = {}
    for status in RecordStatus:
        by_status[status.value] = sum(
            store.count(name, org_id, status=status.value) for name in COLLECTIONS
        )

    return {"totals": totals, "by_status": by_status}
