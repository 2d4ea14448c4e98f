"""
Users API Endpoints

Single-user reads are public; listing the directory requires a bearer token.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from ..models.users import User, UserList
from ..services.auth_guard import require_bearer_token
from ..services.user_directory import get_user, list_users

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=UserList, dependencies=[Depends(require_bearer_token)])
async def list_users_endpoint(
    page: Optional[int] = Query(None, description="1-indexed page number (default 1)"),
    limit: Optional[int] = Query(None, description="Page size (default 20, capped at 100)"),
    role: Optional[str] = Query(None, description="Exact role filter: user | admin | moderator")
) -> UserList:
    """
    List users in directory order.

    Returns:
        {
            "data": List[User],
            "pagination": {"page": int, "limit": int, "total": int}  # total after role filter
        }

    Example:
        GET /api/v1/users?page=1&limit=50&role=user
    """
    logger.info(f"User list: page={page}, limit={limit}, role={role}")

    return list_users(page=page, limit=limit, role=role)


@router.get("/{user_id}", response_model=User)
async def get_user_endpoint(user_id: str) -> User:
    """
    Get user profile, preferences, subscription and metadata.

    Example:
        GET /api/v1/users/1001
    """
    logger.debug(f"Get user: {user_id}")

    return get_user(user_id)
