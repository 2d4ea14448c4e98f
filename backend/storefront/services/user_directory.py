"""
User Directory

Read-only queries over the seeded user directory. Listing keeps directory
insertion order so positional results are deterministic.
"""
import logging
from typing import Optional

from ..exceptions import NotFoundError
from ..mocks.directory import USER_DIRECTORY
from ..models.common import PagePagination
from ..models.users import User, UserList
from .pagination import exact_match, filter_items, page_window, slice_page

logger = logging.getLogger(__name__)


def get_user(user_id: str) -> User:
    """
    Get user by id.

    Args:
        user_id: Path segment; must be an integer to match anything

    Raises:
        NotFoundError: non-numeric or unknown id
    """
    numeric_id = int(user_id) if user_id.isascii() and user_id.isdigit() else None

    if numeric_id is not None:
        for record in USER_DIRECTORY:
            if record["id"] == numeric_id:
                return User.model_validate(record)

    raise NotFoundError(
        f"No user found with ID: {user_id}",
        details={"user_id": user_id}
    )


def list_users(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    role: Optional[str] = None,
) -> UserList:
    """
    List users, filtering by role before paging.

    ``pagination.total`` counts users matching the filter, not the whole directory.
    """
    window = page_window(page, limit)

    matches = filter_items(USER_DIRECTORY, [exact_match("role", role)])
    result = slice_page(matches, window.offset, window.limit)

    logger.debug(f"User list: page={window.page}, limit={window.limit}, role={role}, total={result.total}")

    return UserList(
        data=[User.model_validate(record) for record in result.items],
        pagination=PagePagination(page=window.page, limit=window.limit, total=result.total),
    )
