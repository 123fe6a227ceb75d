"""
data_engine/supabase_gateway.py
────────────────────────────────
Supabase-backed implementation of :class:`~data_engine.gateway.RemoteDataGateway`
— the ONLY place in the codebase that queries the Supabase tables.

Tables
------
    entrepreneurs        primary key ``id`` (principal text)
    success_stories      primary key ``id`` (bigint identity)
    training_resources   primary key ``id`` (bigint identity)
    community_posts      primary key ``id`` (bigint identity)

Store-assigned ids are omitted on insert.  Every client exception is
re-raised as :class:`~core.errors.GatewayError` chained to the original, so
callers never need to know about supabase-py or PostgREST error types.
"""

import asyncio
import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from supabase import AsyncClient

from core.config import Settings
from core.database import create_supabase_client
from core.errors import EntityNotFound, GatewayError, GatewayNotReady
from data_engine.gateway import RemoteDataGateway
from schemas.entities import CommunityPost, Entrepreneur, SuccessStory, TrainingResource

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ENTREPRENEURS_TABLE = "entrepreneurs"
STORIES_TABLE = "success_stories"
RESOURCES_TABLE = "training_resources"
POSTS_TABLE = "community_posts"


class SupabaseGateway(RemoteDataGateway):
    """
    Remote store access through the async supabase-py client.

    The gateway is "not ready" until :meth:`connect` succeeds.  A client can
    also be injected directly, which tests use with a mocked ``AsyncClient``.

    Args:
        settings: Application settings with the Supabase credentials.
        client:   Optional pre-built client.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncClient] = None) -> None:
        self._settings = settings
        self._client = client
        self.connect_attempts = 0

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    async def connect(self) -> bool:
        """
        Establish the client if credentials are configured.

        Returns:
            ``True`` when the gateway is ready afterwards.
        """
        if self._client is not None:
            return True
        if not self._settings.supabase_configured:
            logger.warning("Supabase credentials not set; gateway stays not ready")
            return False
        self.connect_attempts += 1
        try:
            self._client = await create_supabase_client(self._settings)
        except Exception:
            logger.exception("Supabase initialisation failed (attempt %d)", self.connect_attempts)
            return False
        return True

    async def keep_connecting(
        self,
        initial_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
    ) -> bool:
        """
        Retry :meth:`connect` with a doubling delay until the gateway is ready.

        Run as a background task from the app lifespan when the startup
        connect fails; cancel it at shutdown.

        Args:
            initial_delay: First wait in seconds (``SUPABASE_RETRY_SECONDS``).
            max_delay:     Delay cap in seconds (``SUPABASE_RETRY_MAX_SECONDS``).

        Returns:
            ``True`` once connected; ``False`` straight away when no
            credentials are configured, since retrying cannot help.
        """
        if not self._settings.supabase_configured:
            return False
        delay = self._settings.SUPABASE_RETRY_SECONDS if initial_delay is None else initial_delay
        cap = self._settings.SUPABASE_RETRY_MAX_SECONDS if max_delay is None else max_delay
        while not await self.connect():
            logger.info("Retrying Supabase connection in %.1fs", delay)
            await asyncio.sleep(delay)
            delay = min(delay * 2, cap)
        logger.info("Supabase connected after %d attempts", self.connect_attempts)
        return True

    # ── Entrepreneurs ─────────────────────────────────────────────────────

    async def list_entrepreneurs(self) -> List[Entrepreneur]:
        return await self._select_all(ENTREPRENEURS_TABLE, Entrepreneur)

    async def get_entrepreneur(self, principal: str) -> Entrepreneur:
        client = self._require_client()
        try:
            res = await (
                client.table(ENTREPRENEURS_TABLE)
                .select("*")
                .eq("id", principal)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise GatewayError(f"Reading entrepreneur '{principal}' failed: {exc}") from exc

        if not res.data:
            raise EntityNotFound("Entrepreneur", principal)
        return self._parse(ENTREPRENEURS_TABLE, Entrepreneur, res.data)[0]

    async def register_entrepreneur(self, entrepreneur: Entrepreneur) -> None:
        client = self._require_client()
        row = entrepreneur.model_dump(mode="json")
        try:
            # Re-registering the same principal replaces the profile.
            await client.table(ENTREPRENEURS_TABLE).upsert(row, on_conflict="id").execute()
        except Exception as exc:
            raise GatewayError(f"Registering entrepreneur failed: {exc}") from exc
        logger.info("Registered entrepreneur %s", entrepreneur.id)

    # ── Success stories ───────────────────────────────────────────────────

    async def list_success_stories(self) -> List[SuccessStory]:
        return await self._select_all(STORIES_TABLE, SuccessStory)

    async def add_success_story(self, story: SuccessStory) -> None:
        await self._insert(STORIES_TABLE, story)

    # ── Training resources ────────────────────────────────────────────────

    async def list_training_resources(self) -> List[TrainingResource]:
        return await self._select_all(RESOURCES_TABLE, TrainingResource)

    async def add_training_resource(self, resource: TrainingResource) -> None:
        await self._insert(RESOURCES_TABLE, resource)

    # ── Community posts ───────────────────────────────────────────────────

    async def list_community_posts(self) -> List[CommunityPost]:
        return await self._select_all(POSTS_TABLE, CommunityPost)

    async def add_community_post(self, post: CommunityPost) -> None:
        await self._insert(POSTS_TABLE, post)

    # ── private helpers ───────────────────────────────────────────────────

    def _require_client(self) -> AsyncClient:
        if self._client is None:
            raise GatewayNotReady()
        return self._client

    async def _select_all(self, table: str, model: Type[M]) -> List[M]:
        client = self._require_client()
        try:
            res = await client.table(table).select("*").execute()
        except Exception as exc:
            raise GatewayError(f"Reading {table} failed: {exc}") from exc
        rows = self._parse(table, model, res.data or [])
        logger.info("Fetched %d rows from %s", len(rows), table)
        return rows

    async def _insert(self, table: str, entity: BaseModel) -> None:
        client = self._require_client()
        row = entity.model_dump(mode="json", exclude={"id"})
        try:
            await client.table(table).insert(row).execute()
        except Exception as exc:
            raise GatewayError(f"Insert into {table} failed: {exc}") from exc
        logger.info("Inserted 1 row into %s", table)

    @staticmethod
    def _parse(table: str, model: Type[M], rows: List[Any]) -> List[M]:
        try:
            return [model.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise GatewayError(f"Malformed row in {table}: {exc}") from exc
