"""
app/api/v1/endpoints/dashboard.py
──────────────────────────────────
Panchayat progress dashboard.

Routes
------
GET /api/v1/dashboard   Headline counts and per-region progress.

The summary is recomputed from the cached entrepreneur list on every
request; only the raw list is cached.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_coordinator
from data_engine.coordinator import DataCoordinator
from schemas.views import DashboardSummary

router = APIRouter()


@router.get("/", response_model=DashboardSummary, summary="Panchayat progress dashboard")
async def get_dashboard(
    target: Optional[int] = Query(
        default=None,
        ge=1,
        description="Override the configured registrations-per-panchayat target.",
    ),
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> DashboardSummary:
    return await coordinator.dashboard(target)
