"""
analytics/filters.py
─────────────────────
Filter predicates and option lists used by the list views.

A filter value of ``None`` or ``"all"`` means "no filter", matching the
select boxes the views render.  Filtering never reorders: results keep the
order of the (already normalised) input collection.
"""

from typing import Iterable, List, Optional

from schemas.entities import (
    BusinessCategory,
    CommunityPost,
    Entrepreneur,
    ResourceCategory,
    ResourceType,
    SuccessStory,
    TrainingResource,
)

ALL = "all"


def _matches(selected: Optional[str], value: str) -> bool:
    if selected is None or selected == ALL:
        return True
    return value == selected


def _distinct_sorted(values: Iterable[str]) -> List[str]:
    return sorted(set(values))


# ── Directory ─────────────────────────────────────────────────────────────────


def matches_search(e: Entrepreneur, query: Optional[str]) -> bool:
    """Case-insensitive substring match on name, village, panchayat, district."""
    if not query:
        return True
    q = query.lower()
    return any(
        q in field.lower()
        for field in (e.full_name, e.village, e.panchayat, e.district)
    )


def filter_entrepreneurs(
    entrepreneurs: Iterable[Entrepreneur],
    query: Optional[str] = None,
    state: Optional[str] = None,
    district: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Entrepreneur]:
    return [
        e for e in entrepreneurs
        if matches_search(e, query)
        and _matches(state, e.state)
        and _matches(district, e.district)
        and _matches(category, BusinessCategory(e.business_category).value)
    ]


def state_options(entrepreneurs: Iterable[Entrepreneur]) -> List[str]:
    return _distinct_sorted(e.state for e in entrepreneurs)


def district_options(entrepreneurs: Iterable[Entrepreneur], state: Optional[str] = None) -> List[str]:
    """Sorted districts, restricted to ``state`` when one is selected."""
    return _distinct_sorted(e.district for e in entrepreneurs if _matches(state, e.state))


# ── Stories ───────────────────────────────────────────────────────────────────


def filter_stories(
    stories: Iterable[SuccessStory],
    category: Optional[str] = None,
    village: Optional[str] = None,
) -> List[SuccessStory]:
    return [
        s for s in stories
        if _matches(category, BusinessCategory(s.category).value)
        and _matches(village, s.village)
    ]


def village_options(stories: Iterable[SuccessStory]) -> List[str]:
    return _distinct_sorted(s.village for s in stories)


# ── Training resources ────────────────────────────────────────────────────────


def filter_resources(
    resources: Iterable[TrainingResource],
    category: Optional[str] = None,
    resource_type: Optional[str] = None,
) -> List[TrainingResource]:
    return [
        r for r in resources
        if _matches(category, ResourceCategory(r.category).value)
        and _matches(resource_type, ResourceType(r.resource_type).value)
    ]


# ── Community board ───────────────────────────────────────────────────────────


def filter_posts(
    posts: Iterable[CommunityPost],
    category: Optional[str] = None,
    panchayat: Optional[str] = None,
) -> List[CommunityPost]:
    return [
        p for p in posts
        if _matches(category, BusinessCategory(p.category).value)
        and _matches(panchayat, p.panchayat)
    ]


def panchayat_options(posts: Iterable[CommunityPost]) -> List[str]:
    return _distinct_sorted(p.panchayat for p in posts)
