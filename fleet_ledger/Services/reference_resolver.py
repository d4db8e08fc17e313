"""
Reference Resolver
==================

Copies driver and vehicle display fields into a trip payload at write time.

    driver_id  -> driver_name (Driver.name), driver_number (Driver.phone)
    vehicle_id -> vehicle_type, vehicle_number

The copies are snapshots: later edits to the driver or vehicle record do not
propagate to trips already written.

Both lookups run before anything is persisted, so a dangling reference
aborts the whole create/update with NotFoundError.
"""

from typing import Any, Dict

from sqlalchemy.orm import Session

from fleet_ledger.Core.errors import NotFoundError
from fleet_ledger.Repositories import driver as driver_repo
from fleet_ledger.Repositories import vehicle as vehicle_repo


def driver_snapshot(DB: Session, driver_id: str) -> Dict[str, Any]:
    driver = driver_repo.get_driver_by_id(DB, driver_id)
    if driver is None:
        raise NotFoundError("Driver not found")
    return {"driver_name": driver.name, "driver_number": driver.phone}


def vehicle_snapshot(DB: Session, vehicle_id: str) -> Dict[str, Any]:
    vehicle = vehicle_repo.get_vehicle_by_id(DB, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return {"vehicle_type": vehicle.vehicle_type, "vehicle_number": vehicle.vehicle_number}


def attach_refs(DB: Session, payload: Dict[str, Any], include_driver: bool = True) -> Dict[str, Any]:
    """
    Return a copy of payload enriched with driver/vehicle snapshot fields.

    Args:
        DB: SQLAlchemy session (read-only use)
        payload: Trip fields with snake_case keys
        include_driver: Resolve driver_id too. Driver callers creating their
            own trip pass False; only their vehicle is resolved.

    Raises:
        NotFoundError: driver_id or vehicle_id does not exist
    """
    enriched = dict(payload)

    if include_driver and payload.get("driver_id"):
        enriched.update(driver_snapshot(DB, payload["driver_id"]))

    if payload.get("vehicle_id"):
        enriched.update(vehicle_snapshot(DB, payload["vehicle_id"]))

    return enriched
