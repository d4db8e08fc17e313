# fleet_ledger/Models/driver.py

"""
Driver Model - Driver Registry

Database Table: drivers
Primary Key: id (String)

The trip core only reads this table: a driver's name and phone are copied
into trips as snapshot fields when a trip is written. Account management
(passwords, login) belongs to the auth service.
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.sql import func
from fleet_ledger.DB.base_class import Base, new_id


class Driver(Base):
    """
    SQLAlchemy model representing a registered driver.

    Schema:
    - id (PK): Driver identifier, also the `sub` of the driver's token
    - name: Display name, copied to Trip.driver_name
    - email: Unique login email
    - phone: Contact number, copied to Trip.driver_number
    - is_active: Whether the driver account is enabled
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "drivers"

    id = Column(String(32), primary_key=True, default=new_id)

    name = Column(String(200), nullable=False)

    email = Column(String(254), nullable=False, unique=True, index=True)

    phone = Column(String(32), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Driver(id={self.id!r}, name={self.name!r})>"
