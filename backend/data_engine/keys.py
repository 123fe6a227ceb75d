"""
data_engine/keys.py
────────────────────
Query keys for the shared cache.

A key is a tuple whose first element names the logical resource and whose
remaining elements parameterise it (e.g. an entrepreneur principal).
Invalidation matches on tuple prefixes, so ``("entrepreneur",)`` covers
every single-entrepreneur entry while leaving ``("entrepreneurs",)`` alone.
"""

from typing import Sequence, Tuple, Union

QueryKey = Tuple[str, ...]

ENTREPRENEURS: QueryKey = ("entrepreneurs",)
ENTREPRENEUR = "entrepreneur"
SUCCESS_STORIES: QueryKey = ("success_stories",)
TRAINING_RESOURCES: QueryKey = ("training_resources",)
COMMUNITY_POSTS: QueryKey = ("community_posts",)


def entrepreneur_key(principal: str) -> QueryKey:
    return (ENTREPRENEUR, principal)


def normalize_key(key: Union[str, Sequence[str]]) -> QueryKey:
    """Accept a bare resource name or any sequence and return a tuple key."""
    if isinstance(key, str):
        return (key,)
    normalized = tuple(key)
    if not normalized:
        raise ValueError("cache key must not be empty")
    return normalized


def has_prefix(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == prefix
