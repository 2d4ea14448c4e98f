"""
Shared Pydantic building blocks for API projections.

All projections serialize with camelCase keys (``orderId``, ``expiryMonth``)
while Python code uses snake_case attributes.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..exceptions import InvalidTransitionError


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Largest value a SQLite INTEGER column can hold
MAX_MINOR_UNITS = 2 ** 63 - 1


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (SQLite stores no offset)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Render a UTC datetime as ``YYYY-MM-DDTHH:MM:SSZ``."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime(TIMESTAMP_FORMAT)


class CamelModel(BaseModel):
    """Base model emitting camelCase JSON and accepting either spelling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Address(CamelModel):
    """Postal address used for shipping and billing."""
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: str
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: str = Field(min_length=2, max_length=2)


# ==================== Pagination Metadata ====================

class OffsetPagination(CamelModel):
    """Echo of effective offset paging parameters."""
    limit: int
    offset: int
    total: int


class PagePagination(CamelModel):
    """Echo of effective page-number paging parameters (1-indexed)."""
    page: int
    limit: int
    total: int


# ==================== Lifecycle ====================

StatusT = TypeVar("StatusT", bound=Enum)


def check_transition(
    table: Dict[StatusT, FrozenSet[StatusT]],
    current: StatusT,
    target: StatusT,
    entity: str,
) -> None:
    """
    Reject a status change that is not listed in the transition table.

    Raises:
        InvalidTransitionError: target is not reachable from current
    """
    if target not in table.get(current, frozenset()):
        raise InvalidTransitionError(
            f"Cannot move {entity} from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value}
        )
