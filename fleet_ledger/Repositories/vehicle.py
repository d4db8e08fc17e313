# fleet_ledger/Repositories/vehicle.py

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional

from fleet_ledger.Core.errors import ConflictError
from fleet_ledger.Models.vehicle import Vehicle
from fleet_ledger.Schemas.vehicle import Vehicle_create


def get_vehicle_by_id(db: Session, vehicle_id: str) -> Optional[Vehicle]:
    return db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()


def create_vehicle(db: Session, vehicle: Vehicle_create) -> Vehicle:
    """
    Register a vehicle.

    Raises:
        ConflictError: Registration number already registered
    """
    new_vehicle = Vehicle(**vehicle.model_dump())
    db.add(new_vehicle)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Vehicle '{vehicle.vehicle_number}' already exists")

    db.refresh(new_vehicle)
    print(f"[REPO] Vehicle created: {new_vehicle.id} ({new_vehicle.vehicle_number})")
    return new_vehicle
