"""
app/api/v1/router.py
─────────────────────
Aggregates every v1 endpoint module under one ``APIRouter``.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import categories, community, dashboard, entrepreneurs, resources, stories

api_router = APIRouter()
api_router.include_router(entrepreneurs.router, prefix="/entrepreneurs", tags=["entrepreneurs"])
api_router.include_router(stories.router, prefix="/stories", tags=["stories"])
api_router.include_router(resources.router, prefix="/resources", tags=["resources"])
api_router.include_router(community.router, prefix="/community", tags=["community"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
