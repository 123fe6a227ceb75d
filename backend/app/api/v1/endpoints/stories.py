"""
app/api/v1/endpoints/stories.py
────────────────────────────────
Success story endpoints.

Routes
------
GET  /api/v1/stories             Newest-first stories, filtered.
GET  /api/v1/stories/{story_id}  Single story.
POST /api/v1/stories             Publish a story.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from analytics.filters import filter_stories, village_options
from app.api.dependencies import get_coordinator
from data_engine.coordinator import DataCoordinator
from schemas.entities import BusinessCategory, SuccessStory, SuccessStoryCreate
from schemas.views import StoriesView

router = APIRouter()


@router.get("/", response_model=StoriesView, summary="Success stories")
async def list_stories(
    category: Optional[BusinessCategory] = Query(default=None),
    village: Optional[str] = Query(default=None, description="Exact village, or 'all'."),
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> StoriesView:
    stories = await coordinator.list_success_stories()
    return StoriesView(
        stories=filter_stories(stories, category=category.value if category else None, village=village),
        villages=village_options(stories),
    )


@router.get("/{story_id}", response_model=SuccessStory, summary="Story detail")
async def get_story(
    story_id: int,
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> SuccessStory:
    story = await coordinator.get_success_story(story_id)
    if story is None:
        raise HTTPException(status_code=404, detail=f"Story {story_id} not found.")
    return story


@router.post("/", response_model=SuccessStory, status_code=201, summary="Publish a story")
async def add_story(
    payload: SuccessStoryCreate,
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> SuccessStory:
    story = payload.to_entity()
    await coordinator.add_success_story(story)
    return story
