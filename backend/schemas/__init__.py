"""
Pydantic schemas for entities, write payloads and view responses.

Separate from the data layer (data_engine) and routes (HTTP layer).
"""

from schemas.entities import (
    BusinessCategory,
    CommunityPost,
    CommunityPostCreate,
    Entrepreneur,
    EntrepreneurCreate,
    Gender,
    ResourceCategory,
    ResourceType,
    SuccessStory,
    SuccessStoryCreate,
    TrainingResource,
    TrainingResourceCreate,
)
from schemas.views import (
    CategoriesView,
    CategoryOption,
    CommunityView,
    DashboardSummary,
    DirectoryView,
    HealthResponse,
    RegionGroup,
    ResourcesView,
    StoriesView,
)

__all__ = [
    "BusinessCategory",
    "CommunityPost",
    "CommunityPostCreate",
    "Entrepreneur",
    "EntrepreneurCreate",
    "Gender",
    "ResourceCategory",
    "ResourceType",
    "SuccessStory",
    "SuccessStoryCreate",
    "TrainingResource",
    "TrainingResourceCreate",
    "CategoriesView",
    "CategoryOption",
    "CommunityView",
    "DashboardSummary",
    "DirectoryView",
    "HealthResponse",
    "RegionGroup",
    "ResourcesView",
    "StoriesView",
]
