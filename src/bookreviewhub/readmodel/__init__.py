from .composer import (
    ALL_BOOKS,
    UNKNOWN_BOOK_TITLE,
    BookAggregate,
    DashboardStats,
    DerivedView,
    ReviewActivity,
    ReviewFilters,
    SortKey,
    aggregate_books,
    book_aggregate,
    book_title,
    compose,
    dashboard_stats,
    filter_reviews,
    recent_activity,
    search_books,
    star_count,
)
from .state import CatalogSnapshot, fetch_reviews, fetch_snapshot

__all__ = [
    "ALL_BOOKS",
    "UNKNOWN_BOOK_TITLE",
    "BookAggregate",
    "DashboardStats",
    "DerivedView",
    "ReviewActivity",
    "ReviewFilters",
    "SortKey",
    "aggregate_books",
    "book_aggregate",
    "book_title",
    "compose",
    "dashboard_stats",
    "filter_reviews",
    "recent_activity",
    "search_books",
    "star_count",
    "CatalogSnapshot",
    "fetch_reviews",
    "fetch_snapshot",
]
