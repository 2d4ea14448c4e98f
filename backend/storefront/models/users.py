"""
Pydantic User Models

Nullable leaves (``profile.avatar``, ``preferences.notifications.sms``) are
declared ``Optional`` without being dropped from output, so a known-absent
value is serialized as an explicit ``null``.
"""
from enum import Enum
from typing import List, Optional
from pydantic import Field

from .common import CamelModel, PagePagination


class UserRole(str, Enum):
    user = "user"
    admin = "admin"
    moderator = "moderator"


class Profile(CamelModel):
    first_name: str
    last_name: str
    avatar: Optional[str]


class Notifications(CamelModel):
    email: bool
    push: bool
    sms: Optional[bool]


class Preferences(CamelModel):
    notifications: Notifications
    theme: str
    language: str


class Subscription(CamelModel):
    plan: str
    status: str
    expires_at: str
    features: List[str] = Field(min_length=1)


class UserMetadata(CamelModel):
    created_at: str
    last_login_at: str
    login_count: int = Field(gt=0)
    is_verified: bool


class User(CamelModel):
    id: int
    username: str
    email: str
    role: UserRole
    profile: Profile
    preferences: Preferences
    subscription: Subscription
    metadata: UserMetadata


class UserList(CamelModel):
    data: List[User]
    pagination: PagePagination
