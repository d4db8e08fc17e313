# fleet_ledger/Models/vehicle.py
from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from fleet_ledger.DB.base_class import Base, new_id


class Vehicle(Base):
    """
    SQLAlchemy model for a fleet vehicle.

    vehicle_type and vehicle_number are copied into trips as snapshot fields.
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "vehicles"

    id = Column(String(32), primary_key=True, default=new_id)

    vehicle_type = Column(
        String(100),
        nullable=False,
        doc="Category shown on trips (e.g. 'Sedan', 'Innova', 'Tempo Traveller')"
    )

    vehicle_number = Column(
        String(32),
        nullable=False,
        unique=True,
        doc="Registration plate"
    )

    model = Column(String(100), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Vehicle(id={self.id!r}, number={self.vehicle_number!r})>"
