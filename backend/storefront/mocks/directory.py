"""
Mock User Directory Source

Seeded read model standing in for the identity/profile store.
Users are kept in directory insertion order so filtered listings are
deterministic across repeated and concurrent calls.
"""
from typing import Any, Dict, Tuple


# Each record is already shaped like the public projection (snake_case keys).
# ``avatar`` and ``notifications.sms`` are None where the user never set them.
USER_DIRECTORY: Tuple[Dict[str, Any], ...] = (
    {
        "id": 1001,
        "username": "jdoe",
        "email": "john.doe@example.com",
        "role": "user",
        "profile": {
            "first_name": "John",
            "last_name": "Doe",
            "avatar": "https://cdn.example.com/avatars/1001.png",
        },
        "preferences": {
            "notifications": {"email": True, "push": False, "sms": None},
            "theme": "dark",
            "language": "en",
        },
        "subscription": {
            "plan": "premium",
            "status": "active",
            "expires_at": "2026-12-31T23:59:59Z",
            "features": ["advanced_analytics", "priority_support", "custom_reports"],
        },
        "metadata": {
            "created_at": "2023-01-15T10:30:00Z",
            "last_login_at": "2024-03-20T14:22:33Z",
            "login_count": 247,
            "is_verified": True,
        },
    },
    {
        "id": 1002,
        "username": "asmith",
        "email": "alice.smith@example.com",
        "role": "admin",
        "profile": {
            "first_name": "Alice",
            "last_name": "Smith",
            "avatar": "https://cdn.example.com/avatars/1002.png",
        },
        "preferences": {
            "notifications": {"email": True, "push": True, "sms": True},
            "theme": "light",
            "language": "en",
        },
        "subscription": {
            "plan": "enterprise",
            "status": "active",
            "expires_at": "2027-06-30T23:59:59Z",
            "features": ["advanced_analytics", "audit_log", "sso", "priority_support"],
        },
        "metadata": {
            "created_at": "2022-11-02T08:00:00Z",
            "last_login_at": "2024-03-21T09:05:12Z",
            "login_count": 1034,
            "is_verified": True,
        },
    },
    {
        "id": 1003,
        "username": "mgarcia",
        "email": "maria.garcia@example.com",
        "role": "user",
        "profile": {
            "first_name": "Maria",
            "last_name": "Garcia",
            "avatar": "https://cdn.example.com/avatars/1003.png",
        },
        "preferences": {
            "notifications": {"email": False, "push": True, "sms": False},
            "theme": "system",
            "language": "es",
        },
        "subscription": {
            "plan": "basic",
            "status": "active",
            "expires_at": "2025-09-30T23:59:59Z",
            "features": ["standard_reports"],
        },
        "metadata": {
            "created_at": "2023-06-08T16:45:10Z",
            "last_login_at": "2024-02-28T19:11:47Z",
            "login_count": 58,
            "is_verified": True,
        },
    },
    {
        "id": 1004,
        "username": "kchen",
        "email": "kevin.chen@example.com",
        "role": "moderator",
        "profile": {
            "first_name": "Kevin",
            "last_name": "Chen",
            "avatar": None,
        },
        "preferences": {
            "notifications": {"email": True, "push": True, "sms": None},
            "theme": "dark",
            "language": "zh",
        },
        "subscription": {
            "plan": "premium",
            "status": "active",
            "expires_at": "2026-01-31T23:59:59Z",
            "features": ["advanced_analytics", "moderation_tools"],
        },
        "metadata": {
            "created_at": "2023-03-19T12:00:00Z",
            "last_login_at": "2024-03-18T07:30:00Z",
            "login_count": 412,
            "is_verified": True,
        },
    },
    {
        "id": 1005,
        "username": "ebrown",
        "email": "emma.brown@example.com",
        "role": "user",
        "profile": {
            "first_name": "Emma",
            "last_name": "Brown",
            "avatar": None,
        },
        "preferences": {
            "notifications": {"email": True, "push": False, "sms": None},
            "theme": "light",
            "language": "en",
        },
        "subscription": {
            "plan": "free",
            "status": "trialing",
            "expires_at": "2024-04-30T23:59:59Z",
            "features": ["standard_reports"],
        },
        "metadata": {
            "created_at": "2024-02-11T21:14:05Z",
            "last_login_at": "2024-03-01T10:00:00Z",
            "login_count": 3,
            "is_verified": False,
        },
    },
    {
        "id": 1006,
        "username": "opatel",
        "email": "omar.patel@example.com",
        "role": "admin",
        "profile": {
            "first_name": "Omar",
            "last_name": "Patel",
            "avatar": None,
        },
        "preferences": {
            "notifications": {"email": True, "push": False, "sms": False},
            "theme": "dark",
            "language": "en",
        },
        "subscription": {
            "plan": "enterprise",
            "status": "active",
            "expires_at": "2027-01-31T23:59:59Z",
            "features": ["advanced_analytics", "audit_log", "sso"],
        },
        "metadata": {
            "created_at": "2022-08-24T13:37:00Z",
            "last_login_at": "2024-03-22T11:47:29Z",
            "login_count": 2210,
            "is_verified": True,
        },
    },
)
