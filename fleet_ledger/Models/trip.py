# fleet_ledger/Models/trip.py
from sqlalchemy import Column, String, Float, Boolean, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import declared_attr
from fleet_ledger.DB.base_class import Base, new_id, utcnow


class Trip(Base):
    """
    SQLAlchemy model for a trip ledger entry.

    Responsibilities:
    - Stores the commercial facts of one trip (route, customer, amounts)
    - Holds denormalized driver/vehicle snapshots frozen at write time
    - Carries the soft-delete lifecycle flags

    Snapshot columns (driver_name, driver_number, vehicle_type,
    vehicle_number) are copies, not joins. They keep the values that were
    current when the trip was written even if the driver or vehicle record
    changes afterwards.
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "trips"

    # ========================================
    # IDENTITY / AUTHORSHIP
    # ========================================
    id = Column(String(32), primary_key=True, default=new_id)

    created_by = Column(
        String(64),
        nullable=False,
        doc="Caller id that created the trip"
    )

    created_by_role = Column(
        String(16),
        nullable=False,
        doc="Role of the creator: 'admin' or 'driver'"
    )

    # ========================================
    # ASSIGNMENT
    # ========================================
    driver_id = Column(
        String(32),
        ForeignKey('drivers.id', ondelete='SET NULL'),
        nullable=True,
        index=True
    )

    vehicle_id = Column(
        String(32),
        ForeignKey('vehicles.id', ondelete='SET NULL'),
        nullable=True,
        index=True
    )

    # ========================================
    # SNAPSHOT FIELDS
    # ========================================
    driver_name = Column(String(200), nullable=True)
    driver_number = Column(String(32), nullable=True)
    vehicle_type = Column(String(100), nullable=True)
    vehicle_number = Column(String(32), nullable=True)

    # ========================================
    # TRIP FACTS
    # ========================================
    from_location = Column(String(300), nullable=True)
    end_location = Column(String(300), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True, index=True)

    customer_name = Column(String(200), nullable=True)
    customer_number = Column(String(32), nullable=True)

    trip_amount = Column(Float, nullable=True)

    fuel_amount = Column(
        String(200),
        nullable=True,
        doc="Numeric string or operator note such as '2 liters @100'"
    )

    tolls = Column(Float, nullable=True)
    parking_charges = Column(Float, nullable=True)
    driver_beta = Column(Float, nullable=True, doc="Driver bonus or deduction")
    payment_mode = Column(String(32), nullable=True, index=True)
    booking_id = Column(String(100), nullable=True)

    # ========================================
    # LIFECYCLE
    # ========================================
    is_driver_deleted = Column(Boolean, nullable=False, default=False)
    driver_deleted_at = Column(DateTime(timezone=True), nullable=True)
    driver_deleted_by = Column(String(64), nullable=True)

    # ========================================
    # AUDIT FIELDS
    # ========================================
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False
    )

    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True
    )

    __table_args__ = (
        Index('idx_trips_driver_deleted', 'driver_id', 'is_driver_deleted'),
        Index('idx_trips_created_at', 'created_at'),
        CheckConstraint(
            "created_by_role IN ('admin', 'driver')",
            name='check_created_by_role'
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Trip(id={self.id!r}, driver_id={self.driver_id!r}, "
            f"deleted={self.is_driver_deleted!r})>"
        )
