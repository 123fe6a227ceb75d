"""
schemas/views.py
─────────────────
Presentation-ready response models, one per view:

  GET /api/v1/entrepreneurs   → ``DirectoryView``
  GET /api/v1/stories         → ``StoriesView``
  GET /api/v1/resources       → ``ResourcesView``
  GET /api/v1/community       → ``CommunityView``
  GET /api/v1/dashboard       → ``DashboardSummary``
  GET /api/v1/categories      → ``CategoriesView``

``RegionGroup`` and ``DashboardSummary`` are derived on every read of the
entrepreneur collection and are never cached on their own.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from schemas.entities import (
    BusinessCategory,
    CommunityPost,
    Entrepreneur,
    SuccessStory,
    TrainingResource,
)


# ── Dashboard ─────────────────────────────────────────────────────────────────


class RegionGroup(BaseModel):
    """
    Registration progress for one (panchayat, district, state) region.

    Attributes:
        panchayat:  Panchayat name, exactly as registered.
        district:   District name.
        state:      State name.
        total:      Entrepreneurs registered in the region.
        categories: Count per business category; every category is present.
        progress:   ``min(100, total / target * 100)``.
    """

    model_config = ConfigDict(frozen=True)

    panchayat: str
    district: str
    state: str
    total: int
    categories: Dict[BusinessCategory, int]
    progress: float

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.panchayat, self.district, self.state)


class DashboardSummary(BaseModel):
    """Headline numbers plus the ordered region list."""

    total_entrepreneurs: int
    total_panchayats: int
    total_states: int
    target: int
    panchayats: List[RegionGroup]


# ── List views ────────────────────────────────────────────────────────────────


class DirectoryView(BaseModel):
    """Filtered entrepreneur directory with the filter option lists."""

    entrepreneurs: List[Entrepreneur]
    total: int = Field(description="Size of the unfiltered collection.")
    states: List[str]
    districts: List[str]

    @computed_field
    @property
    def showing(self) -> int:
        return len(self.entrepreneurs)


class StoriesView(BaseModel):
    stories: List[SuccessStory]
    villages: List[str]


class ResourcesView(BaseModel):
    resources: List[TrainingResource]

    @computed_field
    @property
    def showing(self) -> int:
        return len(self.resources)


class CommunityView(BaseModel):
    posts: List[CommunityPost]
    panchayats: List[str]


class HealthResponse(BaseModel):
    status: str
    version: str
    gateway_ready: bool


# ── Category metadata ─────────────────────────────────────────────────────────


class CategoryOption(BaseModel):
    """One selectable enum member with its display label and badge colour."""

    value: str
    label: str
    color: Optional[str] = None


class CategoriesView(BaseModel):
    business_categories: List[CategoryOption]
    resource_categories: List[CategoryOption]
    resource_types: List[CategoryOption]
    genders: List[CategoryOption]
