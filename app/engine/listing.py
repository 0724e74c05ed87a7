"""Filter, sort and paginate a snapshot for the bucket list view."""
import math
import unicodedata
from datetime import date, datetime
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from app.engine.dates import parse_date, parse_datetime
from app.engine.errors import InvalidArgumentError
from app.models.bucket_item import BucketItem, ItemStatus, Priority


ALL = "All"
DEFAULT_PAGE_SIZE = 6

PRIORITY_RANK = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}
UNRANKED = len(PRIORITY_RANK)


class ListView(str, Enum):
    """Top-level restriction applied before any other filter."""

    ALL = "All"
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"


class SortOrder(str, Enum):
    """Sort orders offered by the list view."""

    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"
    PRIORITY = "priority"


class ListingQuery(BaseModel):
    """
    Filter/sort/page configuration.

    `status`, `category` and `priority` accept "All" to disable the filter.
    A `sort` of None keeps the snapshot's order.
    """

    view: ListView = ListView.ALL
    status: str = ALL
    category: str = ALL
    priority: str = ALL
    tags: list[str] = Field(default_factory=list)
    search: str = ""
    sort: Optional[SortOrder] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


class ListingPage(BaseModel):
    """One page of matching items."""

    items: list[BucketItem]
    total_pages: int
    total_matching: int
    page: int
    page_size: int


def _in_view(item: BucketItem, view: ListView, today: date) -> bool:
    if view == ListView.COMPLETED:
        return item.status == ItemStatus.COMPLETED
    if view == ListView.UPCOMING:
        if item.status == ItemStatus.COMPLETED:
            return False
        target = parse_date(item.target_date)
        return target is not None and target > today
    return True


def _matches_field(value, wanted: str) -> bool:
    if wanted == ALL:
        return True
    return value == wanted


def _has_all_tags(item: BucketItem, required: Sequence[str]) -> bool:
    tags = set(item.tags or [])
    return all(tag in tags for tag in required)


def _matches_search(item: BucketItem, term: str) -> bool:
    needle = term.casefold()
    fields = [item.title, item.description, item.category, *(item.tags or [])]
    return any(field and needle in field.casefold() for field in fields)


def collation_key(text: Optional[str]) -> str:
    """
    Case- and accent-insensitive sort key for titles.

    Examples:
        >>> collation_key("Émile") == collation_key("emile")
        True
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


def _date_key(item: BucketItem) -> datetime:
    moment = parse_datetime(item.target_date) if item.target_date else None
    if moment is None:
        moment = parse_datetime(item.created_at)
    return moment or datetime.min


def _priority_key(item: BucketItem) -> int:
    priority = item.priority or Priority.MEDIUM
    try:
        return PRIORITY_RANK[Priority(priority)]
    except ValueError:
        return UNRANKED


def sort_items(items: Sequence[BucketItem], order: Optional[SortOrder]) -> list[BucketItem]:
    """Stable sort; items with equal keys keep their relative order."""
    if order is None:
        return list(items)
    if order == SortOrder.NAME_ASC:
        return sorted(items, key=lambda item: collation_key(item.title))
    if order == SortOrder.NAME_DESC:
        return sorted(items, key=lambda item: collation_key(item.title), reverse=True)
    if order == SortOrder.DATE_ASC:
        return sorted(items, key=_date_key)
    if order == SortOrder.DATE_DESC:
        return sorted(items, key=_date_key, reverse=True)
    return sorted(items, key=_priority_key)


def filter_items(
    records: Sequence[BucketItem],
    query: ListingQuery,
    today: date,
) -> list[BucketItem]:
    """Apply view, exact-match, tag and search filters in that order."""
    items = [item for item in records if _in_view(item, query.view, today)]

    items = [
        item
        for item in items
        if _matches_field(item.status, query.status)
        and _matches_field(item.category, query.category)
        and _matches_field(item.priority, query.priority)
    ]

    if query.tags:
        items = [item for item in items if _has_all_tags(item, query.tags)]

    if query.search:
        items = [item for item in items if _matches_search(item, query.search)]

    return items


def apply_listing(
    records: Sequence[BucketItem],
    query: ListingQuery,
    today: date,
) -> ListingPage:
    """
    Produce the requested page of the filtered, sorted snapshot.

    Args:
        records: Snapshot of one owner's items
        query: Filter/sort/page configuration
        today: Evaluation date for the Upcoming view

    Returns:
        ListingPage; a page past the last one has no items

    Raises:
        InvalidArgumentError: If page_size or page is below 1
    """
    if query.page_size <= 0:
        raise InvalidArgumentError("page_size must be a positive integer")
    if query.page < 1:
        raise InvalidArgumentError("page must be 1 or greater")

    matching = sort_items(filter_items(records, query, today), query.sort)
    total = len(matching)
    start = (query.page - 1) * query.page_size

    return ListingPage(
        items=matching[start:start + query.page_size],
        total_pages=math.ceil(total / query.page_size),
        total_matching=total,
        page=query.page,
        page_size=query.page_size,
    )
