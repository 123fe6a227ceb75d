"""
analytics/aggregation.py
─────────────────────────
Regional progress statistics for the panchayat dashboard.

Pure functions: identical input (including order) always yields identical
output, and nothing here touches the cache or the gateway.

Grouping
--------
Entrepreneurs are grouped by the exact ``(panchayat, district, state)``
triple in a single pass.  Each group counts its members and its members per
:class:`~schemas.entities.BusinessCategory` (every category present, zero by
default).  Groups are ordered by total descending; equal totals keep the
order in which their first member appeared in the input.
"""

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from schemas.entities import BusinessCategory, Entrepreneur
from schemas.views import DashboardSummary, RegionGroup

logger = logging.getLogger(__name__)

RegionKey = Tuple[str, str, str]


def progress_percent(total: int, target: int) -> float:
    """``min(100, total / target * 100)``; ``target`` must be positive."""
    if target <= 0:
        raise ValueError(f"target must be positive, got {target}")
    return min(100.0, total / target * 100)


def aggregate(entrepreneurs: Iterable[Entrepreneur], target: int) -> List[RegionGroup]:
    """
    Group entrepreneurs into regions and compute progress toward ``target``.

    Args:
        entrepreneurs: Flat entrepreneur collection, in store order.
        target:        Registrations per region that count as 100 %.

    Returns:
        ``RegionGroup`` list, largest region first.

    Raises:
        ValueError: If ``target`` is not positive.
    """
    if target <= 0:
        raise ValueError(f"target must be positive, got {target}")

    # dicts preserve insertion order, which gives first-appearance order.
    totals: Dict[RegionKey, int] = {}
    counts: Dict[RegionKey, Dict[BusinessCategory, int]] = {}
    for e in entrepreneurs:
        key = (e.panchayat, e.district, e.state)
        if key not in totals:
            totals[key] = 0
            counts[key] = {category: 0 for category in BusinessCategory}
        totals[key] += 1
        counts[key][BusinessCategory(e.business_category)] += 1

    ordered = sorted(totals, key=lambda k: -totals[k])
    groups = [
        RegionGroup(
            panchayat=key[0],
            district=key[1],
            state=key[2],
            total=totals[key],
            categories=counts[key],
            progress=progress_percent(totals[key], target),
        )
        for key in ordered
    ]
    logger.debug("Aggregated %d regions (target=%d)", len(groups), target)
    return groups


def summarize(entrepreneurs: Sequence[Entrepreneur], target: int) -> DashboardSummary:
    """
    Build the full dashboard payload.

    Args:
        entrepreneurs: Flat entrepreneur collection.
        target:        Registrations per region that count as 100 %.

    Returns:
        ``DashboardSummary`` with headline counts and the ordered regions.
    """
    groups = aggregate(entrepreneurs, target)
    return DashboardSummary(
        total_entrepreneurs=len(entrepreneurs),
        total_panchayats=len(groups),
        total_states=len({e.state for e in entrepreneurs}),
        target=target,
        panchayats=groups,
    )
