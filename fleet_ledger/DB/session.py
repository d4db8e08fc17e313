"""
fleet_ledger/DB/session.py
======================================
Database Session Configuration Module
======================================

This module establishes the SQLAlchemy engine and session factory used by
every repository in the trip ledger.

Session Configuration:
---------------------
- autocommit=False: Transactions must be explicitly committed
- autoflush=False: Changes are not flushed before queries
- bind=engine: Sessions are bound to the configured database engine

SQLite:
-------
SQLite URLs are accepted for development and tests. They are opened with
check_same_thread=False because FastAPI runs sync endpoints in a threadpool,
and in-memory databases share a single connection through StaticPool so every
session sees the same data.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fleet_ledger.Core.config import settings


def build_engine(database_url: str):
    """Create an engine with the connect options the URL's dialect needs."""
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return create_engine(database_url, **options)

    return create_engine(database_url, pool_pre_ping=True)


# ============================================================
# DATABASE ENGINE CONFIGURATION
# ============================================================
engine = build_engine(settings.DATABASE_URL)


# ============================================================
# SESSION FACTORY CONFIGURATION
# ============================================================
SessionLocal = sessionmaker(
    autocommit=False,  # Require explicit commit() for transaction control
    autoflush=False,
    bind=engine
)
