"""
analytics/sorting.py
─────────────────────
Canonical newest-first ordering for time-stamped collections.

The remote store returns rows in no particular order, and several rows can
share a timestamp (concurrent writes in the same instant).  Python's
``sorted`` is stable, so sorting on the negated timestamp keeps same-instant
rows in their input order and the resulting sequence is deterministic.
"""

from operator import attrgetter
from typing import Callable, Iterable, List, TypeVar

from schemas.entities import CommunityPost, SuccessStory

T = TypeVar("T")


def sort_newest_first(items: Iterable[T], timestamp: Callable[[T], int]) -> List[T]:
    """
    Return ``items`` ordered by timestamp, most recent first.

    Args:
        items:     Any iterable of entities; it is not modified.
        timestamp: Extracts the integer timestamp from an entity.

    Returns:
        New list.  Entities with equal timestamps keep their relative
        input order.
    """
    return sorted(items, key=lambda item: -timestamp(item))


def sort_stories(stories: Iterable[SuccessStory]) -> List[SuccessStory]:
    return sort_newest_first(stories, attrgetter("date"))


def sort_posts(posts: Iterable[CommunityPost]) -> List[CommunityPost]:
    return sort_newest_first(posts, attrgetter("timestamp"))
