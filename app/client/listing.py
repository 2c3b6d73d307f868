"""
Filtering and ordering of app listings for the public directory and the admin console.

All orderings go through ``sorted`` and are therefore stable: apps that compare equal keep
their relative order from the source list.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from enum import Enum
from functools import cache
from typing import Final
from uuid import UUID

from pyuca import Collator

from app.api.payloads import AppPayload, ReportPayload
from app.models.app import Category

# UI-only category filter value; never stored on an app.
ALL_CATEGORIES: Final = "All"

CategoryFilter = Category | str


class SortOption(Enum):
    NEWEST = "NEWEST"
    POPULAR = "POPULAR"
    FEATURED = "FEATURED"
    ALPHABETICAL = "ALPHABETICAL"
    # Admin console only.
    REPORTED = "REPORTED"


def matches_search(app: AppPayload, search_term: str) -> bool:
    """Case-insensitive substring match against name, description or any tag."""
    term = search_term.lower()
    return term in app.name.lower() or term in app.description.lower() or any(term in tag.lower() for tag in app.tags)


def filter_apps(apps: Iterable[AppPayload], category: CategoryFilter, search_term: str) -> list[AppPayload]:
    """
    Apps visible in the public directory.

    The approval check repeats the server-side gate so a stale or mixed cache can never
    surface an unapproved listing.
    """
    return [
        app
        for app in apps
        if app.approved
        and (category == ALL_CATEGORIES or app.category == category)
        and matches_search(app, search_term)
    ]


@cache
def _collator() -> Collator:
    """Unicode Collation Algorithm with the default table; loading it takes a moment, so it is built once."""
    return Collator()


def _name_key(app: AppPayload) -> tuple[int, ...]:
    # Accented letters sort with their base letter and case only breaks ties.
    return _collator().sort_key(app.name)


def sort_apps(
    apps: Iterable[AppPayload],
    sort_by: SortOption,
    report_counts: Mapping[UUID, int] | None = None,
) -> list[AppPayload]:
    if sort_by == SortOption.NEWEST:
        return sorted(apps, key=lambda app: -app.added_at)
    if sort_by == SortOption.POPULAR:
        return sorted(apps, key=lambda app: -app.clicks)
    if sort_by == SortOption.FEATURED:
        return sorted(apps, key=lambda app: (not app.featured, -app.clicks))
    if sort_by == SortOption.ALPHABETICAL:
        return sorted(apps, key=_name_key)
    if sort_by == SortOption.REPORTED:
        counts = report_counts or {}
        return sorted(apps, key=lambda app: (-counts.get(app.id, 0), -app.clicks))
    raise ValueError(f"Unsupported sort option: {sort_by}")


def count_reports(reports: Iterable[ReportPayload]) -> Counter[UUID]:
    """Number of reports per app id."""
    return Counter(report.app_id for report in reports)
