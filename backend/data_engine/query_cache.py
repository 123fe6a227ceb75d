"""
data_engine/query_cache.py
───────────────────────────
Process-wide, keyed cache of fetched collections with fetch coalescing and
generation-guarded commits.

Workflow (per ``get`` call)
---------------------------
1. Entry is ``ready`` and not stale → return the cached payload.
2. A fetch for the key is already in flight → await that same fetch.
3. Otherwise bump the entry's generation, mark it ``loading`` and start a
   fetch task.  Every caller awaits the task through ``asyncio.shield`` so a
   caller that gives up never cancels the fetch for everyone else.
4. On completion the result is committed only if the generation captured at
   start still equals the entry's generation.  ``invalidate`` advances the
   generation too, so a fetch that started before a write can never commit
   data that predates it.

State machine
-------------
    empty ──► loading ──► ready ──(invalidate + get)──► loading
                    └───► errored ──(get)──► loading

There is no time-based expiry; staleness comes only from ``invalidate``.
All mutation of the entry map happens on the event loop thread, which is
what serialises access.  Do not share one instance across threads.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Set, Union

from core.errors import FetchFailure
from data_engine.keys import QueryKey, has_prefix, normalize_key

logger = logging.getLogger(__name__)

FetchFn = Callable[[], Awaitable[Any]]
KeyLike = Union[str, Sequence[str]]


class CacheStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


@dataclass
class CacheEntry:
    """
    State of one cache key.

    Attributes:
        key:        Normalised query key.
        status:     Lifecycle state (see module docstring).
        data:       Last committed payload; kept while stale, loading or errored.
        error:      Failure from the latest fetch, cleared by the next success.
        generation: Monotonic counter advanced by every fetch start and
                    every invalidation.
        stale:      Set by ``invalidate``; forces the next ``get`` to refetch.
        updated_at: When ``data`` was last committed.
    """

    key: QueryKey
    status: CacheStatus = CacheStatus.EMPTY
    data: Any = None
    error: Optional[FetchFailure] = None
    generation: int = 0
    stale: bool = False
    updated_at: Optional[datetime] = None
    pending: Optional["asyncio.Task[Any]"] = field(default=None, repr=False, compare=False)

    @property
    def is_fresh(self) -> bool:
        return self.status is CacheStatus.READY and not self.stale

    @property
    def is_fetching(self) -> bool:
        return self.pending is not None and not self.pending.done()


class QueryCache:
    """
    Keyed store shared by every view.

    Construct one per process (the FastAPI lifespan does this) and pass it
    by reference to whatever needs it.

    Example:
        >>> cache = QueryCache()
        >>> rows = await cache.get(("entrepreneurs",), gateway.list_entrepreneurs)
        >>> cache.invalidate("entrepreneurs")
    """

    def __init__(self) -> None:
        self._entries: Dict[QueryKey, CacheEntry] = {}
        # Strong refs to running fetches, including ones detached by invalidate.
        self._tasks: Set["asyncio.Task[Any]"] = set()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: KeyLike) -> bool:
        return normalize_key(key) in self._entries

    # ── public API ────────────────────────────────────────────────────────

    async def get(self, key: KeyLike, fetch_fn: FetchFn) -> Any:
        """
        Return the freshest value for ``key``, fetching only when needed.

        Args:
            key:      Query key (tuple, or bare resource name).
            fetch_fn: Zero-argument coroutine function that loads the value.

        Returns:
            The cached or freshly fetched payload.

        Raises:
            FetchFailure: The fetch this call attached to failed.
        """
        key = normalize_key(key)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = CacheEntry(key)

        if entry.is_fresh:
            return entry.data

        if entry.is_fetching:
            logger.debug("Joining in-flight fetch for %r (generation %d)", key, entry.generation)
        else:
            self._start_fetch(entry, fetch_fn)

        return await asyncio.shield(entry.pending)

    def invalidate(self, key_or_prefix: KeyLike) -> int:
        """
        Mark every entry whose key starts with ``key_or_prefix`` as stale.

        Cached payloads stay visible until the next ``get`` replaces them.
        Any fetch already in flight for a matching key is superseded: it
        still resolves for its own callers but will not be committed.

        Returns:
            Number of entries invalidated.
        """
        prefix = normalize_key(key_or_prefix)
        affected = 0
        for key, entry in self._entries.items():
            if not has_prefix(key, prefix):
                continue
            entry.stale = True
            entry.generation += 1
            entry.pending = None
            affected += 1
        logger.info("Invalidated %d cache entries under %r", affected, prefix)
        return affected

    def peek(self, key: KeyLike) -> CacheEntry:
        """
        Return the entry for ``key`` without fetching.

        Unknown keys yield a detached ``empty`` entry; the map is not touched.
        """
        key = normalize_key(key)
        return self._entries.get(key) or CacheEntry(key)

    def entries(self) -> List[CacheEntry]:
        return list(self._entries.values())

    @property
    def in_flight(self) -> int:
        """Fetch tasks still running, superseded ones included."""
        return len(self._tasks)

    # ── private helpers ───────────────────────────────────────────────────

    def _start_fetch(self, entry: CacheEntry, fetch_fn: FetchFn) -> None:
        entry.generation += 1
        entry.status = CacheStatus.LOADING
        task = asyncio.ensure_future(self._run_fetch(entry, entry.generation, fetch_fn))
        self._tasks.add(task)
        task.add_done_callback(self._fetch_done)
        entry.pending = task
        logger.debug("Started fetch for %r (generation %d)", entry.key, entry.generation)

    def _fetch_done(self, task: "asyncio.Task[Any]") -> None:
        self._tasks.discard(task)
        # Marks the exception retrieved; it is already on the entry or logged.
        if not task.cancelled():
            task.exception()

    def _is_current(self, entry: CacheEntry, generation: int) -> bool:
        return self._entries.get(entry.key) is entry and entry.generation == generation

    async def _run_fetch(self, entry: CacheEntry, generation: int, fetch_fn: FetchFn) -> Any:
        try:
            data = await fetch_fn()
        except Exception as exc:
            failure = FetchFailure(entry.key, str(exc) or type(exc).__name__)
            if self._is_current(entry, generation):
                entry.status = CacheStatus.ERRORED
                entry.error = failure
                entry.pending = None
                logger.warning("Fetch for %r failed: %s", entry.key, failure.detail)
            else:
                logger.debug(
                    "Superseded fetch for %r (generation %d) failed: %s",
                    entry.key, generation, failure.detail,
                )
            raise failure from exc

        if self._is_current(entry, generation):
            entry.status = CacheStatus.READY
            entry.data = data
            entry.error = None
            entry.stale = False
            entry.updated_at = datetime.now(timezone.utc)
            entry.pending = None
            logger.debug("Committed %r (generation %d)", entry.key, generation)
        else:
            logger.debug(
                "Discarded result for %r: generation %d superseded by %d",
                entry.key, generation, entry.generation,
            )
        return data
