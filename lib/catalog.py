# =============================================================================
# lib/catalog.py - Directory Filtering and Sorting
# =============================================================================
# Pure functions behind the public portfolio listing:
# - unique_tags: the tag chips shown above the grid
# - filter_by_tag: narrow the grid to one tag ("All" shows everything)
# - sort_portfolios: recently added, most popular, or alphabetical
#
# Portfolios are plain dicts as returned by PostgREST.
# =============================================================================

from enum import Enum
from typing import Any, Iterable

from lib.utils import parse_timestamp

ALL_TAGS = "All"


class SortOption(str, Enum):
    """
    Orderings offered by the directory.

    - recently_added: newest portfolios first
    - most_popular: highest favorites_count first
    - alphabetical: by name, case-insensitive
    """
    RECENTLY_ADDED = "recently_added"
    MOST_POPULAR = "most_popular"
    ALPHABETICAL = "alphabetical"


def unique_tags(portfolios: Iterable[dict[str, Any]]) -> list[str]:
    """
    Collect the distinct non-blank tags across portfolios.

    Order is first-seen, so the chips stay stable as new portfolios
    are appended.
    """
    seen: dict[str, None] = {}
    for portfolio in portfolios:
        for tag in portfolio.get("tags") or []:
            tag = tag.strip()
            if tag and tag not in seen:
                seen[tag] = None
    return list(seen)


def filter_by_tag(
    portfolios: list[dict[str, Any]],
    tag: str | None,
) -> list[dict[str, Any]]:
    """Keep portfolios carrying `tag`. None, "" and "All" disable the filter."""
    tag = (tag or "").strip()
    if not tag or tag == ALL_TAGS:
        return list(portfolios)
    return [
        p for p in portfolios
        if tag in [t.strip() for t in (p.get("tags") or [])]
    ]


def sort_portfolios(
    portfolios: list[dict[str, Any]],
    sort: SortOption = SortOption.RECENTLY_ADDED,
) -> list[dict[str, Any]]:
    """
    Return a new list ordered by `sort`.

    The input list is left untouched. A missing favorites_count counts as 0.
    """
    if sort == SortOption.MOST_POPULAR:
        return sorted(
            portfolios,
            key=lambda p: p.get("favorites_count") or 0,
            reverse=True,
        )
    if sort == SortOption.ALPHABETICAL:
        return sorted(portfolios, key=lambda p: (p.get("name") or "").casefold())
    return sorted(
        portfolios,
        key=lambda p: parse_timestamp(p.get("created_at")),
        reverse=True,
    )
