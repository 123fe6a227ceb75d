"""
app/api/v1/endpoints/community.py
──────────────────────────────────
Community board endpoints.

Routes
------
GET  /api/v1/community   Newest-first posts, filtered by category / panchayat.
POST /api/v1/community   Post a message.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from analytics.filters import filter_posts, panchayat_options
from app.api.dependencies import get_coordinator
from data_engine.coordinator import DataCoordinator
from schemas.entities import BusinessCategory, CommunityPost, CommunityPostCreate
from schemas.views import CommunityView

router = APIRouter()


@router.get("/", response_model=CommunityView, summary="Community posts")
async def list_posts(
    category: Optional[BusinessCategory] = Query(default=None),
    panchayat: Optional[str] = Query(default=None, description="Exact panchayat, or 'all'."),
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> CommunityView:
    posts = await coordinator.list_community_posts()
    return CommunityView(
        posts=filter_posts(posts, category=category.value if category else None, panchayat=panchayat),
        panchayats=panchayat_options(posts),
    )


@router.post("/", response_model=CommunityPost, status_code=201, summary="Post a message")
async def add_post(
    payload: CommunityPostCreate,
    coordinator: DataCoordinator = Depends(get_coordinator),
) -> CommunityPost:
    post = payload.to_entity()
    await coordinator.add_community_post(post)
    return post
