"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the backend test suite.

Fixtures
--------
gateway
    ``FakeGateway`` — in-memory ``RemoteDataGateway`` with call counters,
    per-call gates (to hold a fetch open) and one-shot failure injection.

cache / coordinator
    A fresh ``QueryCache`` and a ``DataCoordinator`` wired to ``gateway``.

app_client
    ``httpx.AsyncClient`` wired to the FastAPI app with the coordinator
    dependency overridden, so tests never hit Supabase.

make_entrepreneur / make_story / make_post / make_resource
    Factories for valid entities with overridable fields.

Usage
-----
    async def test_health(app_client):
        resp = await app_client.get("/")
        assert resp.status_code == 200
"""

import asyncio
from collections import Counter
from itertools import count
from typing import AsyncGenerator, Dict, List

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_coordinator
from app.main import app
from core.errors import EntityNotFound
from data_engine.coordinator import DataCoordinator
from data_engine.gateway import RemoteDataGateway
from data_engine.query_cache import QueryCache
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


# ── Fake gateway ──────────────────────────────────────────────────────────────


class FakeGateway(RemoteDataGateway):
    """
    In-memory store.

    Reads snapshot the collection when the call starts, so a read held open
    by a gate returns what the store contained at that moment, like a real
    request that was already on the wire.
    """

    def __init__(self) -> None:
        self.ready = True
        self.entrepreneurs: List[Entrepreneur] = []
        self.stories: List[SuccessStory] = []
        self.resources: List[TrainingResource] = []
        self.posts: List[CommunityPost] = []
        self.calls: Counter = Counter()
        self.failures: Dict[str, Exception] = {}
        self._gates: Dict[str, List[asyncio.Event]] = {}
        self._ids = count(1000)

    @property
    def is_ready(self) -> bool:
        return self.ready

    def hold(self, operation: str) -> asyncio.Event:
        """Block the next call to ``operation`` until the returned event is set."""
        gate = asyncio.Event()
        self._gates.setdefault(operation, []).append(gate)
        return gate

    def fail_next(self, operation: str, exc: Exception) -> None:
        self.failures[operation] = exc

    async def _enter(self, operation: str) -> None:
        self.calls[operation] += 1
        gates = self._gates.get(operation)
        if gates:
            await gates.pop(0).wait()
        failure = self.failures.pop(operation, None)
        if failure is not None:
            raise failure

    async def list_entrepreneurs(self) -> List[Entrepreneur]:
        snapshot = list(self.entrepreneurs)
        await self._enter("list_entrepreneurs")
        return snapshot

    async def get_entrepreneur(self, principal: str) -> Entrepreneur:
        snapshot = list(self.entrepreneurs)
        await self._enter("get_entrepreneur")
        for e in snapshot:
            if e.id == principal:
                return e
        raise EntityNotFound("Entrepreneur", principal)

    async def register_entrepreneur(self, entrepreneur: Entrepreneur) -> None:
        await self._enter("register_entrepreneur")
        self.entrepreneurs = [e for e in self.entrepreneurs if e.id != entrepreneur.id]
        self.entrepreneurs.append(entrepreneur)

    async def list_success_stories(self) -> List[SuccessStory]:
        snapshot = list(self.stories)
        await self._enter("list_success_stories")
        return snapshot

    async def add_success_story(self, story: SuccessStory) -> None:
        await self._enter("add_success_story")
        self.stories.append(story.model_copy(update={"id": next(self._ids)}))

    async def list_training_resources(self) -> List[TrainingResource]:
        snapshot = list(self.resources)
        await self._enter("list_training_resources")
        return snapshot

    async def add_training_resource(self, resource: TrainingResource) -> None:
        await self._enter("add_training_resource")
        self.resources.append(resource.model_copy(update={"id": next(self._ids)}))

    async def list_community_posts(self) -> List[CommunityPost]:
        snapshot = list(self.posts)
        await self._enter("list_community_posts")
        return snapshot

    async def add_community_post(self, post: CommunityPost) -> None:
        await self._enter("add_community_post")
        self.posts.append(post.model_copy(update={"id": next(self._ids)}))


async def _settle(rounds: int = 5) -> None:
    """Let every runnable task advance to its next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def settle():
    """Coroutine function that drains pending callbacks on the event loop."""
    return _settle


# ── Core fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def coordinator(gateway: FakeGateway, cache: QueryCache) -> DataCoordinator:
    return DataCoordinator(gateway, cache, target=1000)


# ── Entity factories ──────────────────────────────────────────────────────────


@pytest.fixture
def make_entrepreneur():
    ids = count(1)

    def _make(**overrides) -> Entrepreneur:
        n = next(ids)
        fields = {
            "id": f"principal-{n}",
            "full_name": f"Entrepreneur {n}",
            "age": 24,
            "gender": Gender.female,
            "contact_info": "+91 90000 00000",
            "village": "Rampur",
            "panchayat": "Rampur Gram",
            "district": "Nashik",
            "state": "Maharashtra",
            "business_category": BusinessCategory.agriculture,
            "skills": ["farming"],
            "bio": "Grows millets.",
        }
        fields.update(overrides)
        return Entrepreneur(**fields)

    return _make


@pytest.fixture
def make_story():
    ids = count(1)

    def _make(**overrides) -> SuccessStory:
        n = next(ids)
        fields = {
            "id": n,
            "title": f"Story {n}",
            "content": "From one goat to a dairy co-operative.",
            "author_name": "Asha",
            "village": "Rampur",
            "category": BusinessCategory.food,
            "date": n * 1_000_000_000,
        }
        fields.update(overrides)
        return SuccessStory(**fields)

    return _make


@pytest.fixture
def make_post():
    ids = count(1)

    def _make(**overrides) -> CommunityPost:
        n = next(ids)
        fields = {
            "id": n,
            "author": "2vxsx-fae",
            "village": "Rampur",
            "panchayat": "Rampur Gram",
            "message": f"Message {n}",
            "category": BusinessCategory.environment,
            "timestamp": n * 1_000_000_000,
        }
        fields.update(overrides)
        return CommunityPost(**fields)

    return _make


@pytest.fixture
def make_resource():
    ids = count(1)

    def _make(**overrides) -> TrainingResource:
        n = next(ids)
        fields = {
            "id": n,
            "url": f"https://example.org/resource/{n}",
            "title": f"Resource {n}",
            "description": "Drip irrigation basics.",
            "resource_type": ResourceType.guide,
            "category": ResourceCategory.agriculture,
        }
        fields.update(overrides)
        return TrainingResource(**fields)

    return _make


# ── Test client ───────────────────────────────────────────────────────────────


@pytest.fixture
async def app_client(coordinator: DataCoordinator) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTPX client with the coordinator dependency overridden.

    Startup lifespan is skipped to avoid real Supabase connections in tests.
    """
    app.dependency_overrides[get_coordinator] = lambda: coordinator

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
