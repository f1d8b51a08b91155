"""
Dashboard Schemas
"""
from pydantic import BaseModel
from typing import Dict


class DashboardStats(BaseModel):
    """Record totals per collection and per verification status."""
    totals: Dict[str, int]
    by_status: Dict[str, int]
