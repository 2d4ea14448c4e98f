"""
Database Initialization

Creates the SQLite ledger tables (payments, refunds, orders) and manages the
SQLAlchemy async engine used by request handlers.

The engine is created at application startup and disposed at shutdown so
that every application lifespan owns its own connection pool.
"""
import asyncio
import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..config import settings

logger = logging.getLogger(__name__)


def create_tables(conn: sqlite3.Connection) -> None:
    """
    Create all ledger tables with indexes.

    Tables:
    - payments: Payment ledger with card projection and lifecycle timestamps
    - refunds: Append-only refunds per payment
    - orders: Order book with frozen line items and totals

    Also enables WAL mode so readers never block the single writer.
    """
    cursor = conn.cursor()

    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")  # 30 second timeout
    cursor.execute("PRAGMA synchronous=NORMAL")

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS payments (
            id TEXT PRIMARY KEY,
            order_id TEXT NOT NULL,
            amount INTEGER NOT NULL CHECK(amount > 0),
            currency TEXT NOT NULL,
            status TEXT NOT NULL CHECK(status IN ('pending', 'succeeded', 'failed', 'refunded')),
            description TEXT,
            customer_email TEXT NOT NULL,
            customer_name TEXT,
            billing_address TEXT NOT NULL,
            payment_method_type TEXT NOT NULL DEFAULT 'card',
            card_id TEXT NOT NULL,
            card_details TEXT NOT NULL,
            authorization_code TEXT,
            failure_reason TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            succeeded_at TIMESTAMP
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_payments_order_id ON payments(order_id)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_payments_status ON payments(status)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_payments_created ON payments(created_at)")

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS refunds (
            id TEXT PRIMARY KEY,
            payment_id TEXT NOT NULL,
            amount INTEGER NOT NULL CHECK(amount > 0),
            status TEXT NOT NULL DEFAULT 'succeeded',
            reason TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (payment_id) REFERENCES payments(id)
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_refunds_payment_id ON refunds(payment_id)")

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS orders (
            id TEXT PRIMARY KEY,
            customer_id TEXT NOT NULL,
            customer_email TEXT NOT NULL,
            customer_name TEXT,
            status TEXT NOT NULL CHECK(status IN ('pending', 'paid', 'shipped', 'delivered', 'cancelled')),
            items TEXT NOT NULL,
            subtotal INTEGER NOT NULL,
            total INTEGER NOT NULL,
            currency TEXT NOT NULL,
            shipping_address TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_orders_customer_id ON orders(customer_id)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_orders_status ON orders(status)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_orders_created ON orders(created_at)")

    conn.commit()
    logger.debug("Ledger tables created")


def initialize_database(database_path: Optional[str] = None) -> None:
    """
    Initialize the database with all required tables.

    Called during FastAPI startup, before the async engine is opened.
    """
    db_path = Path(database_path or settings.database_path)

    logger.info(f"Initializing database at: {db_path}")

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        create_tables(conn)
    finally:
        conn.close()


# ============================================================================
# Per-store write locks
# ============================================================================

@dataclass
class StoreLocks:
    """
    One lock per mutable store.

    Held around read-modify-write sequences (status transitions, refunds) so
    that concurrent requests against the same store serialize, while the
    payment ledger and order book never wait on each other.
    """
    payments: asyncio.Lock = field(default_factory=asyncio.Lock)
    orders: asyncio.Lock = field(default_factory=asyncio.Lock)


def get_store_locks(request: Request) -> StoreLocks:
    """FastAPI dependency returning the locks created at application startup."""
    return request.app.state.store_locks


# ============================================================================
# SQLAlchemy Async Session Setup for FastAPI
# ============================================================================

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def init_engine(database_path: Optional[str] = None) -> AsyncEngine:
    """Create the async engine and session factory for the given database file."""
    global _engine, _session_factory

    database_url = f"sqlite+aiosqlite:///{database_path or settings.database_path}"
    _engine = create_async_engine(
        database_url,
        echo=False,
        connect_args={
            "timeout": 30,  # 30 second timeout for lock acquisition
            "check_same_thread": False
        },
        pool_pre_ping=True,
    )
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    return _engine


async def dispose_engine() -> None:
    """Close all pooled connections."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


def get_session_factory() -> async_sessionmaker:
    """
    Session factory for code running outside a request (background tasks).

    Raises:
        RuntimeError: engine not initialized (application not started)
    """
    if _session_factory is None:
        raise RuntimeError("Database engine is not initialized")
    return _session_factory


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions in FastAPI.

    Usage:
        @router.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_session_factory()() as session:
        yield session


# Alias for FastAPI Depends
get_db = get_async_session


def main():
    """CLI entry point for initializing database."""
    logging.basicConfig(level=logging.INFO)
    initialize_database()


if __name__ == "__main__":
    main()
