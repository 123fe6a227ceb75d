"""
data_engine/gateway.py
───────────────────────
Abstract interface to the remote data store.

WARNING: ISOLATION BOUNDARY
---------------------------
Concrete gateways are the ONLY place that talks to the store.  Views and
services go through :class:`~data_engine.coordinator.DataCoordinator`,
which adds caching, readiness gating and invalidation on top.

Every operation is a coroutine and may fail with
:class:`~core.errors.GatewayError` (transport failure or remote rejection)
or, for ``get_entrepreneur``, :class:`~core.errors.EntityNotFound`.
Identity values are opaque principal strings used for equality only.
"""

from abc import ABC, abstractmethod
from typing import List

from schemas.entities import CommunityPost, Entrepreneur, SuccessStory, TrainingResource


class RemoteDataGateway(ABC):
    """
    The nine store operations the data layer consumes.

    Subclasses (``SupabaseGateway``, test fakes) must implement all of them
    plus the ``is_ready`` property.
    """

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True once the connection to the store is established."""

    # ── Entrepreneurs ─────────────────────────────────────────────────────

    @abstractmethod
    async def list_entrepreneurs(self) -> List[Entrepreneur]:
        """Return every registered entrepreneur, in store order."""

    @abstractmethod
    async def get_entrepreneur(self, principal: str) -> Entrepreneur:
        """
        Return the entrepreneur registered under ``principal``.

        Raises:
            EntityNotFound: No entrepreneur has that principal.
        """

    @abstractmethod
    async def register_entrepreneur(self, entrepreneur: Entrepreneur) -> None:
        """Create (or replace) the profile for ``entrepreneur.id``."""

    # ── Success stories ───────────────────────────────────────────────────

    @abstractmethod
    async def list_success_stories(self) -> List[SuccessStory]:
        """Return every story, in store order."""

    @abstractmethod
    async def add_success_story(self, story: SuccessStory) -> None:
        """Insert ``story``; the store assigns its id."""

    # ── Training resources ────────────────────────────────────────────────

    @abstractmethod
    async def list_training_resources(self) -> List[TrainingResource]:
        """Return every training resource, in store order."""

    @abstractmethod
    async def add_training_resource(self, resource: TrainingResource) -> None:
        """Insert ``resource``; the store assigns its id."""

    # ── Community posts ───────────────────────────────────────────────────

    @abstractmethod
    async def list_community_posts(self) -> List[CommunityPost]:
        """Return every community post, in store order."""

    @abstractmethod
    async def add_community_post(self, post: CommunityPost) -> None:
        """Insert ``post``; the store assigns its id."""
