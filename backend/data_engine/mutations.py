"""
data_engine/mutations.py
─────────────────────────
Single-write executor with targeted cache invalidation.

Each :class:`MutationKind` maps to one gateway write and to the cache keys
whose data that write changes.  On success those keys are invalidated
before ``execute`` returns, so any read issued afterwards refetches.

Writes are not idempotent (re-submitting a story creates a second story),
so failures are raised to the caller and never retried here.  Callers keep
the submit action disabled while :meth:`MutationCoordinator.is_pending`
reports an outstanding write.
"""

import logging
from collections import Counter
from enum import Enum
from typing import Any, Callable, Dict, List, Union

from core.errors import GatewayError, GatewayNotReady, MutationFailure
from data_engine import keys
from data_engine.gateway import RemoteDataGateway
from data_engine.keys import QueryKey
from data_engine.query_cache import QueryCache

logger = logging.getLogger(__name__)


class MutationKind(str, Enum):
    """Supported writes; each value is the gateway method it calls."""

    REGISTER_ENTREPRENEUR = "register_entrepreneur"
    ADD_SUCCESS_STORY = "add_success_story"
    ADD_TRAINING_RESOURCE = "add_training_resource"
    ADD_COMMUNITY_POST = "add_community_post"


# Keys made stale by a successful write, given the written payload.
_INVALIDATES: Dict[MutationKind, Callable[[Any], List[QueryKey]]] = {
    MutationKind.REGISTER_ENTREPRENEUR: lambda e: [keys.ENTREPRENEURS, keys.entrepreneur_key(e.id)],
    MutationKind.ADD_SUCCESS_STORY: lambda _: [keys.SUCCESS_STORIES],
    MutationKind.ADD_TRAINING_RESOURCE: lambda _: [keys.TRAINING_RESOURCES],
    MutationKind.ADD_COMMUNITY_POST: lambda _: [keys.COMMUNITY_POSTS],
}


class MutationCoordinator:
    """
    Execute writes against the gateway and invalidate what they affect.

    Args:
        gateway: Remote store the writes go to.
        cache:   Shared query cache to invalidate on success.
    """

    def __init__(self, gateway: RemoteDataGateway, cache: QueryCache) -> None:
        self._gateway = gateway
        self._cache = cache
        self._in_flight: Counter = Counter()

    def is_pending(self, kind: Union[MutationKind, str]) -> bool:
        """True while at least one write of ``kind`` is outstanding."""
        return self._in_flight[MutationKind(kind)] > 0

    async def execute(self, kind: Union[MutationKind, str], payload: Any) -> None:
        """
        Run one write and invalidate the affected cache keys on success.

        Args:
            kind:    Which write to perform.
            payload: Entity passed to the gateway write.

        Raises:
            GatewayNotReady: The gateway is not connected; nothing was sent.
            MutationFailure: The gateway rejected the write; the cache is
                             left untouched.
        """
        kind = MutationKind(kind)
        if not self._gateway.is_ready:
            raise GatewayNotReady(f"Cannot {kind.value}: data gateway is not ready")

        write = getattr(self._gateway, kind.value)
        self._in_flight[kind] += 1
        try:
            await write(payload)
        except GatewayNotReady:
            raise
        except GatewayError as exc:
            logger.warning("%s rejected: %s", kind.value, exc)
            raise MutationFailure(kind.value, str(exc)) from exc
        finally:
            self._in_flight[kind] -= 1

        for key in _INVALIDATES[kind](payload):
            self._cache.invalidate(key)
        logger.info("%s succeeded", kind.value)
