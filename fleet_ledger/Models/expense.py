# fleet_ledger/Models/expense.py

"""
Expense Models - Maintenance and Advertising

Company expense records that are not tied to a single trip. The statistics
engine reads them to subtract overheads from trip revenue:

- Maintenance: workshop/service costs, optionally attributed to a driver
- Ad: advertising spend, always company-wide
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleet_ledger.DB.base_class import Base, new_id


class Maintenance(Base):

    id = Column(String(32), primary_key=True, default=new_id)

    driver_id = Column(
        String(32),
        ForeignKey('drivers.id', ondelete='SET NULL'),
        nullable=True,
        index=True,
        doc="Driver responsible for the vehicle at the time (optional)"
    )

    vehicle_id = Column(
        String(32),
        ForeignKey('vehicles.id', ondelete='SET NULL'),
        nullable=True
    )

    cost = Column(Float, nullable=True)
    description = Column(String(500), nullable=True)
    service_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Maintenance(id={self.id!r}, cost={self.cost!r})>"


class Ad(Base):

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "ads"

    id = Column(String(32), primary_key=True, default=new_id)

    amount = Column(Float, nullable=True)
    platform = Column(String(100), nullable=True)
    description = Column(String(500), nullable=True)
    spent_on = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Ad(id={self.id!r}, amount={self.amount!r})>"
