"""
data_engine/coordinator.py
───────────────────────────
Data coordinator — the SINGLE entry point views use for community data.

Workflow (per read)
-------------------
1. Check gateway readiness.  This is an explicit precondition, checked
   before the cache is touched:
     * collection reads return ``[]`` ("no data yet").  Nothing is cached,
       so the first read after the gateway connects fetches for real.
     * point reads raise ``GatewayNotReady``; an empty result there would
       hide an entity that really exists.
2. Read through the shared :class:`QueryCache`, which coalesces concurrent
   fetches for the same key.
3. Stories and posts are normalised newest-first at fetch time, so the
   cached payload is already in display order.

Writes go through :class:`MutationCoordinator`, which raises
``GatewayNotReady`` / ``MutationFailure`` and invalidates the affected keys
on success.
"""

import logging
from functools import partial
from typing import List, Optional

from analytics.aggregation import summarize
from analytics.sorting import sort_posts, sort_stories
from core.errors import GatewayNotReady
from data_engine import keys
from data_engine.gateway import RemoteDataGateway
from data_engine.mutations import MutationCoordinator, MutationKind
from data_engine.query_cache import QueryCache
from schemas.entities import CommunityPost, Entrepreneur, SuccessStory, TrainingResource
from schemas.views import DashboardSummary

logger = logging.getLogger(__name__)

DEFAULT_PANCHAYAT_TARGET = 1000


class DataCoordinator:
    """
    Cached reads, invalidating writes and derived views over one gateway.

    Args:
        gateway: Remote store.
        cache:   Shared query cache; one per process.
        target:  Default registrations per panchayat for the dashboard.

    Example:
        >>> coordinator = DataCoordinator(SupabaseGateway(settings), QueryCache())
        >>> stories = await coordinator.list_success_stories()
    """

    def __init__(
        self,
        gateway: RemoteDataGateway,
        cache: QueryCache,
        target: int = DEFAULT_PANCHAYAT_TARGET,
    ) -> None:
        if target <= 0:
            raise ValueError(f"target must be positive, got {target}")
        self.gateway = gateway
        self.cache = cache
        self.mutations = MutationCoordinator(gateway, cache)
        self.target = target

    @property
    def is_ready(self) -> bool:
        return self.gateway.is_ready

    # ── Entrepreneurs ─────────────────────────────────────────────────────

    async def list_entrepreneurs(self) -> List[Entrepreneur]:
        if not self.gateway.is_ready:
            logger.debug("Gateway not ready; serving empty entrepreneur list")
            return []
        return await self.cache.get(keys.ENTREPRENEURS, self.gateway.list_entrepreneurs)

    async def get_entrepreneur(self, principal: str) -> Entrepreneur:
        """
        Return one entrepreneur by principal.

        Raises:
            ValueError:      ``principal`` is blank.
            GatewayNotReady: The gateway is not connected.
            FetchFailure:    The read failed (``not_found`` set for a
                             missing principal).
        """
        principal = principal.strip()
        if not principal:
            raise ValueError("principal must not be empty")
        self._require_ready()
        return await self.cache.get(
            keys.entrepreneur_key(principal),
            partial(self.gateway.get_entrepreneur, principal),
        )

    async def register_entrepreneur(self, entrepreneur: Entrepreneur) -> None:
        await self.mutations.execute(MutationKind.REGISTER_ENTREPRENEUR, entrepreneur)

    # ── Success stories ───────────────────────────────────────────────────

    async def list_success_stories(self) -> List[SuccessStory]:
        if not self.gateway.is_ready:
            logger.debug("Gateway not ready; serving empty story list")
            return []
        return await self.cache.get(keys.SUCCESS_STORIES, self._fetch_stories)

    async def get_success_story(self, story_id: int) -> Optional[SuccessStory]:
        """Look ``story_id`` up in the cached story list; ``None`` if absent."""
        for story in await self.list_success_stories():
            if story.id == story_id:
                return story
        return None

    async def add_success_story(self, story: SuccessStory) -> None:
        await self.mutations.execute(MutationKind.ADD_SUCCESS_STORY, story)

    # ── Training resources ────────────────────────────────────────────────

    async def list_training_resources(self) -> List[TrainingResource]:
        if not self.gateway.is_ready:
            logger.debug("Gateway not ready; serving empty resource list")
            return []
        return await self.cache.get(keys.TRAINING_RESOURCES, self.gateway.list_training_resources)

    async def add_training_resource(self, resource: TrainingResource) -> None:
        await self.mutations.execute(MutationKind.ADD_TRAINING_RESOURCE, resource)

    # ── Community posts ───────────────────────────────────────────────────

    async def list_community_posts(self) -> List[CommunityPost]:
        if not self.gateway.is_ready:
            logger.debug("Gateway not ready; serving empty post list")
            return []
        return await self.cache.get(keys.COMMUNITY_POSTS, self._fetch_posts)

    async def add_community_post(self, post: CommunityPost) -> None:
        await self.mutations.execute(MutationKind.ADD_COMMUNITY_POST, post)

    # ── Derived views ─────────────────────────────────────────────────────

    async def dashboard(self, target: Optional[int] = None) -> DashboardSummary:
        """Regional progress computed fresh from the cached entrepreneur list."""
        entrepreneurs = await self.list_entrepreneurs()
        return summarize(entrepreneurs, target or self.target)

    # ── private helpers ───────────────────────────────────────────────────

    def _require_ready(self) -> None:
        if not self.gateway.is_ready:
            raise GatewayNotReady()

    async def _fetch_stories(self) -> List[SuccessStory]:
        return sort_stories(await self.gateway.list_success_stories())

    async def _fetch_posts(self) -> List[CommunityPost]:
        return sort_posts(await self.gateway.list_community_posts())
