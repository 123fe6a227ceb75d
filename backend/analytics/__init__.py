"""
analytics — Pure derived views computed on top of cached collections.

Modules
-------
    analytics.sorting      Stable newest-first ordering.
    analytics.aggregation  Panchayat progress groups and dashboard summary.
    analytics.filters      List-view filter predicates and option lists.
"""

from analytics.aggregation import aggregate, summarize
from analytics.sorting import sort_newest_first, sort_posts, sort_stories

__all__ = [
    "aggregate",
    "summarize",
    "sort_newest_first",
    "sort_posts",
    "sort_stories",
]
