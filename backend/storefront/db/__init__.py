"""
Database package for the Storefront ledgers.

Exports database initialization, models, locks and session management.
"""
from .init_db import (
    StoreLocks,
    dispose_engine,
    get_db,
    get_session_factory,
    get_store_locks,
    init_engine,
    initialize_database,
)
from .models import (
    Base,
    OrderModel,
    PaymentModel,
    RefundModel,
)

__all__ = [
    "StoreLocks",
    "dispose_engine",
    "get_db",
    "get_session_factory",
    "get_store_locks",
    "init_engine",
    "initialize_database",
    "Base",
    "OrderModel",
    "PaymentModel",
    "RefundModel",
]
