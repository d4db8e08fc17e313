"""
fleet_ledger/DB/base_class.py
=================================
SQLAlchemy Base Model Definition
=================================

Declarative base for all ledger models (SQLAlchemy 2.0 style).

Table names default to the lowercase class name; models that need a plural
or snake_case table name override __tablename__ themselves:
    - Trip → trips
    - Driver → drivers
    - Vehicle → vehicles
    - Ad → ads
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase, declared_attr


def new_id() -> str:
    """Primary key generator shared by every ledger table."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models in the application.

    All models inheriting from it are registered in Base.metadata, which is
    what Alembic and create_all() operate on.
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
