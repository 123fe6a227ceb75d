"""
app/api/v1/endpoints/resources.py
──────────────────────────────────
Training resource endpoints.

Routes
------
GET  /api/v1/resources   Resources filtered by category and type.
POST /api/v1/resources   Add a resource.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from analytics.filters import filter_resources
from app.api.dependencies import get_coordinator
from data_engine.coordinator import DataCoordinator
from schemas.entities import ResourceCategory, ResourceType, TrainingResource, TrainingResourceCreate
from schemas.views import ResourcesView

router = APIRouter()


@router.get("/", response_model=ResourcesView, summary="Training resources")
async def list_resources(
    category: Optional[ResourceCategory] = Query(default=None),
    resource_type: Optional[ResourceType] = Query(default=None),
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> ResourcesView:
    resources = await coordinator.list_training_resources()
    return ResourcesView(
        resources=filter_resources(
            resources,
            category=category.value if category else None,
            resource_type=resource_type.value if resource_type else None,
        )
    )


@router.post("/", response_model=TrainingResource, status_code=201, summary="Add a resource")
async def add_resource(
    payload: TrainingResourceCreate,
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> TrainingResource:
    resource = payload.to_entity()
    await coordinator.add_training_resource(resource)
    return resource
