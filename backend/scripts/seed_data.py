"""
Seed script to populate Supabase with demo entrepreneurs, stories,
resources and community posts.

Every record goes through the DataCoordinator, so the write path (readiness
check, error wrapping and cache invalidation) is the same one the API uses.
"""
import asyncio
import logging
import os
import sys
import time

# Add the parent directory to sys.path so we can import backend modules
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.config import get_settings
from core.errors import DataLayerError
from data_engine.coordinator import DataCoordinator
from data_engine.query_cache import QueryCache
from data_engine.supabase_gateway import SupabaseGateway
from schemas.entities import (
    BusinessCategory,
    CommunityPost,
    Entrepreneur,
    Gender,
    ResourceCategory,
    ResourceType,
    SuccessStory,
    TrainingResource,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_NOW = time.time_ns()
_DAY_NS = 86_400 * 10**9

ENTREPRENEURS = [
    Entrepreneur(
        id="seed-asha", full_name="Asha Patil", age=23, gender=Gender.female,
        contact_info="+91 90000 00001", village="Rampur", panchayat="Rampur Gram",
        district="Nashik", state="Maharashtra", business_category=BusinessCategory.agriculture,
        skills=["millet farming", "drip irrigation"], bio="Grows and sells millets.",
    ),
    Entrepreneur(
        id="seed-ravi", full_name="Ravi Kumar", age=27, gender=Gender.male,
        contact_info="+91 90000 00002", village="Kumarakom", panchayat="Kumarakom",
        district="Kottayam", state="Kerala", business_category=BusinessCategory.food,
        skills=["banana chips", "packaging"], bio="Runs a snack micro-unit.",
    ),
    Entrepreneur(
        id="seed-meena", full_name="Meena Devi", age=19, gender=Gender.female,
        contact_info="+91 90000 00003", village="Rampur", panchayat="Rampur Gram",
        district="Nashik", state="Maharashtra", business_category=BusinessCategory.sustainability,
        skills=["solar dryers"], bio="Builds solar fruit dryers.",
    ),
]

STORIES = [
    SuccessStory(
        title="From one goat to a dairy co-operative", content="Started with one goat in 2019...",
        author_name="Asha Patil", village="Rampur", category=BusinessCategory.agriculture,
        date=_NOW - 2 * _DAY_NS,
    ),
    SuccessStory(
        title="Banana chips for the whole district", content="Our first batch sold out in a day...",
        author_name="Ravi Kumar", village="Kumarakom", category=BusinessCategory.food,
        date=_NOW - _DAY_NS,
    ),
]

RESOURCES = [
    TrainingResource(
        url="https://example.org/drip-irrigation", title="Drip irrigation basics",
        description="Save water on small plots.", resource_type=ResourceType.guide,
        category=ResourceCategory.agriculture,
    ),
    TrainingResource(
        url="https://example.org/bookkeeping", title="Bookkeeping for micro-units",
        description="Track sales and costs.", resource_type=ResourceType.course,
        category=ResourceCategory.general,
    ),
]

POSTS = [
    CommunityPost(
        author="2vxsx-fae", village="Rampur", panchayat="Rampur Gram",
        message="Seed swap this Sunday at the panchayat office.",
        category=BusinessCategory.agriculture, timestamp=_NOW,
    ),
]


async def seed():
    settings = get_settings()
    gateway = SupabaseGateway(settings)
    if not await gateway.connect():
        logger.error("Supabase is not configured or unreachable; nothing seeded")
        return
    coord = DataCoordinator(gateway, QueryCache(), target=settings.PANCHAYAT_TARGET)

    batches = [
        (coord.register_entrepreneur, ENTREPRENEURS),
        (coord.add_success_story, STORIES),
        (coord.add_training_resource, RESOURCES),
        (coord.add_community_post, POSTS),
    ]
    for write, records in batches:
        for record in records:
            label = getattr(record, "full_name", None) or getattr(record, "title", None) or record.message
            logger.info("Seeding %s...", label)
            try:
                await write(record)
            except DataLayerError as e:
                logger.error("Failed to seed %s: %s", label, e)

    summary = await coord.dashboard()
    logger.info(
        "Done: %d entrepreneurs across %d panchayats",
        summary.total_entrepreneurs,
        summary.total_panchayats,
    )


if __name__ == "__main__":
    asyncio.run(seed())
