"""
Pagination and Filter Engine

Shared slicing, counting and predicate filtering for every list endpoint.

Two paging styles are supported:
- offset paging (``limit`` + ``offset``) for orders, payments and products
- page-number paging (``page`` + ``limit``, 1-indexed) for users

The returned metadata always echoes the effective parameters after defaults
and the limit cap are applied.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..config import settings
from ..exceptions import InvalidRequestError

T = TypeVar("T")


@dataclass(frozen=True)
class OffsetWindow:
    limit: int
    offset: int


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """One page of results plus the size of the full (filtered) collection."""
    items: List[T]
    total: int


def effective_limit(limit: Optional[int]) -> int:
    """
    Apply the default and the cap to a requested page size.

    Raises:
        InvalidRequestError: limit < 1
    """
    if limit is None:
        return settings.default_page_limit
    if limit < 1:
        raise InvalidRequestError("limit must be at least 1", details={"limit": limit})
    return min(limit, settings.max_page_limit)


def offset_window(limit: Optional[int], offset: Optional[int]) -> OffsetWindow:
    """Resolve effective offset paging parameters."""
    if offset is None:
        offset = 0
    if offset < 0:
        raise InvalidRequestError("offset must not be negative", details={"offset": offset})
    return OffsetWindow(limit=effective_limit(limit), offset=offset)


def page_window(page: Optional[int], limit: Optional[int]) -> PageWindow:
    """Resolve effective page-number paging parameters."""
    if page is None:
        page = 1
    if page < 1:
        raise InvalidRequestError("page must be at least 1", details={"page": page})
    return PageWindow(page=page, limit=effective_limit(limit))


def exact_match(attribute: str, value: Any) -> Optional[Callable[[Any], bool]]:
    """
    Build an equality predicate on a record key or attribute.

    Returns None when value is None so unset query parameters filter nothing.
    """
    if value is None:
        return None

    def predicate(record: Any) -> bool:
        current = record.get(attribute) if isinstance(record, dict) else getattr(record, attribute)
        return current == value

    return predicate


def filter_items(
    items: Iterable[T],
    predicates: Sequence[Optional[Callable[[T], bool]]] = ()
) -> List[T]:
    """Keep items matching every non-None predicate, preserving input order."""
    active = [p for p in predicates if p is not None]
    return [item for item in items if all(p(item) for p in active)]


def slice_page(items: Sequence[T], offset: int, limit: int) -> Page[T]:
    """
    Slice an already filtered, stably ordered snapshot.

    ``total`` and the page are computed from the same sequence, so they
    always agree within one response.
    """
    snapshot: Tuple[T, ...] = tuple(items)
    return Page(items=list(snapshot[offset:offset + limit]), total=len(snapshot))
