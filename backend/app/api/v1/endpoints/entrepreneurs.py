"""
app/api/v1/endpoints/entrepreneurs.py
──────────────────────────────────────
Entrepreneur directory, profile and registration endpoints.

Routes
------
GET  /api/v1/entrepreneurs              Filtered directory + filter options.
GET  /api/v1/entrepreneurs/{principal}  Single profile.
POST /api/v1/entrepreneurs              Register (or re-register) a profile.

Error codes
-----------
404  No entrepreneur with that principal.
422  Invalid registration body, or a blank principal.
502  The store rejected the registration.
503  Data gateway not ready, or the read failed.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from analytics.filters import district_options, filter_entrepreneurs, state_options
from app.api.dependencies import get_coordinator
from data_engine.coordinator import DataCoordinator
from schemas.entities import BusinessCategory, Entrepreneur, EntrepreneurCreate
from schemas.views import DirectoryView

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=DirectoryView, summary="Entrepreneur directory")
async def list_entrepreneurs(
    q: Optional[str] = Query(
        default=None,
        max_length=100,
        description="Case-insensitive search over name, village, panchayat and district.",
    ),
    state: Optional[str] = Query(default=None, description="Exact state, or 'all'."),
    district: Optional[str] = Query(default=None, description="Exact district, or 'all'."),
    category: Optional[BusinessCategory] = Query(default=None, description="Business category."),
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> DirectoryView:
    """
    Return the filtered directory.

    ``districts`` lists only the districts of the selected state, so the
    client can narrow its district picker once a state is chosen.
    """
    entrepreneurs = await coordinator.list_entrepreneurs()
    matches = filter_entrepreneurs(
        entrepreneurs,
        query=q,
        state=state,
        district=district,
        category=category.value if category else None,
    )
    return DirectoryView(
        entrepreneurs=matches,
        total=len(entrepreneurs),
        states=state_options(entrepreneurs),
        districts=district_options(entrepreneurs, state),
    )


@router.get("/{principal}", response_model=Entrepreneur, summary="Entrepreneur profile")
async def get_entrepreneur(
    principal: str = Path(
        ...,
        min_length=1,
        pattern=r"\S",
        description="Principal of the entrepreneur; must not be blank.",
    ),
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> Entrepreneur:
    return await coordinator.get_entrepreneur(principal)


@router.post(
    "/",
    response_model=Entrepreneur,
    status_code=201,
    summary="Register an entrepreneur",
)
async def register_entrepreneur(
    payload: EntrepreneurCreate,
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> Entrepreneur:
    """
    Register a profile and invalidate the cached directory.

    Returns:
        The profile as submitted.
    """
    entrepreneur = payload.to_entity()
    await coordinator.register_entrepreneur(entrepreneur)
    logger.info("Registered %s in %s / %s", entrepreneur.id, entrepreneur.panchayat, entrepreneur.state)
    return entrepreneur
