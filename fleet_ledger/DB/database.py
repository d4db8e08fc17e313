# fleet_ledger/DB/database.py

"""
Database Utilities Module

Schema bootstrap and connectivity helpers used at startup and by the
health endpoint. Request-scoped sessions come from
fleet_ledger.Controller.deps.get_DB.

Usage:
    from fleet_ledger.DB.database import create_all_tables, test_db_connection

    if settings.AUTO_CREATE_TABLES:
        create_all_tables()

Notes:
    create_all_tables() is meant for development and tests. Production
    schemas are managed with `alembic upgrade head`.
"""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from fleet_ledger.DB.session import SessionLocal, engine


# ============================================================
# Database Health Check Utilities
# ============================================================

def test_db_connection() -> bool:
    """
    Test database connectivity with a simple query.

    Returns:
        bool: True if database is reachable and responsive, False otherwise

    Notes:
        - Does not raise (returns False on error)
        - Logs error details to console for debugging
    """
    with SessionLocal() as db:
        try:
            return db.execute(text("SELECT 1")).scalar() == 1
        except SQLAlchemyError as e:
            print(f"[DB] ❌ Connection test failed: {e}")
            return False


# ============================================================
# Schema Bootstrap
# ============================================================

def create_all_tables(bind=None):
    """
    Create all tables defined in the model registry.

    Idempotent: existing tables are skipped, nothing is migrated.

    Args:
        bind: Engine or connection to use (defaults to the application engine)
    """
    from fleet_ledger.DB.base import Base
    print("[DB] 🔨 Creating all tables...")
    Base.metadata.create_all(bind=bind or engine)
    print("[DB] ✅ Tables created successfully")


def drop_all_tables(bind=None):
    """
    Drop all tables defined in the model registry.

    WARNING: destructive. Only for development and test teardown.
    """
    from fleet_ledger.DB.base import Base
    print("[DB] 🗑️  Dropping all tables...")
    Base.metadata.drop_all(bind=bind or engine)
    print("[DB] ✅ Tables dropped successfully")


__all__ = [
    "test_db_connection",
    "create_all_tables",
    "drop_all_tables"
]
