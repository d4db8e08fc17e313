# fleet_ledger/Repositories/trip.py
"""
Trip Repository - Trip Entity Store.

Responsibilities:
- CRUD operations for the trips table
- Filtered listing (driver, vehicle, payment mode, start date range)
- Sort strings in API field names ("-createdAt", "tripAmount startDate")

No authorization happens here. Callers pass filters that already include the
visibility scope computed by the trip policy.

Usage:
    from fleet_ledger.Repositories import trip as trip_repo

    trip = trip_repo.create_trip(db, {"from_location": "Pune", ...})
    rows = trip_repo.list_trips(db, driver_id="d1", sort="-createdAt")
"""

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_camel

from fleet_ledger.Core.errors import ValidationError
from fleet_ledger.Models.trip import Trip

DEFAULT_SORT = "-createdAt"

# API (camelCase) field name -> column
SORTABLE_COLUMNS = {to_camel(column.key): column for column in Trip.__table__.columns}


# ==========================================================
# CREATE OPERATIONS
# ==========================================================

def create_trip(DB: Session, trip_data: Dict[str, Any]) -> Trip:
    """
    Persist a new trip.

    Args:
        DB: SQLAlchemy session
        trip_data: Column values (snake_case keys), already enriched and authorized

    Returns:
        Trip: Created trip with generated id and created_at
    """
    new_trip = Trip(**trip_data)
    DB.add(new_trip)
    DB.commit()
    DB.refresh(new_trip)

    print(f"[REPO] Trip created: {new_trip.id} (driver: {new_trip.driver_id}, by: {new_trip.created_by_role})")

    return new_trip


# ==========================================================
# READ OPERATIONS
# ==========================================================

def get_trip_by_id(DB: Session, trip_id: str) -> Optional[Trip]:
    return DB.query(Trip).filter(Trip.id == trip_id).first()


def parse_sort(sort: Optional[str]) -> list:
    """
    Translate a sort string into ORDER BY clauses.

    Keys are separated by spaces or commas; a leading '-' means descending.

    Raises:
        ValidationError: Unknown field name
    """
    clauses = []
    for key in (sort or DEFAULT_SORT).replace(",", " ").split():
        descending = key.startswith("-")
        name = key.lstrip("-+")
        column = SORTABLE_COLUMNS.get(name)
        if column is None:
            raise ValidationError.for_field("sort", f"Cannot sort by '{name}'")
        clauses.append(column.desc() if descending else column.asc())

    return clauses or [Trip.created_at.desc()]


def list_trips(
    DB: Session,
    include_deleted: bool = False,
    driver_id: Optional[str] = None,
    vehicle_id: Optional[str] = None,
    payment_mode: Optional[str] = None,
    start_from: Optional[datetime] = None,
    start_to: Optional[datetime] = None,
    created_by: Optional[str] = None,
    sort: Optional[str] = DEFAULT_SORT
) -> List[Trip]:
    """
    List trips matching every supplied filter.

    Args:
        DB: SQLAlchemy session
        include_deleted: Also return soft-deleted trips (default False)
        driver_id: Only trips assigned to this driver
        vehicle_id: Only trips using this vehicle
        payment_mode: Exact payment mode match (e.g. 'cash', 'upi')
        start_from: Trips whose startDate is on or after this datetime
        start_to: Trips whose startDate is on or before this datetime
        created_by: Only trips created by this caller id
        sort: Sort string, default "-createdAt"

    Returns:
        list[Trip]: Matching trips, unpaginated
    """
    query = DB.query(Trip)

    if not include_deleted:
        query = query.filter(Trip.is_driver_deleted.is_not(True))

    # Optional filters
    if driver_id:
        query = query.filter(Trip.driver_id == driver_id)

    if vehicle_id:
        query = query.filter(Trip.vehicle_id == vehicle_id)

    if payment_mode:
        query = query.filter(Trip.payment_mode == payment_mode)

    if start_from:
        query = query.filter(Trip.start_date >= start_from)

    if start_to:
        query = query.filter(Trip.start_date <= start_to)

    if created_by:
        query = query.filter(Trip.created_by == created_by)

    return query.order_by(*parse_sort(sort)).all()


# ==========================================================
# UPDATE OPERATIONS
# ==========================================================

def update_trip(DB: Session, db_trip: Trip, updates: Dict[str, Any]) -> Trip:
    """
    Apply field updates to a loaded trip and commit.

    Last writer wins: there is no version check between the read and this
    write.
    """
    for key, value in updates.items():
        setattr(db_trip, key, value)

    DB.commit()
    DB.refresh(db_trip)

    print(f"[REPO] Trip updated: {db_trip.id} ({len(updates)} fields)")

    return db_trip


def save_trip(DB: Session, db_trip: Trip) -> Trip:
    """Commit attribute changes already made on a loaded trip."""
    DB.commit()
    DB.refresh(db_trip)
    return db_trip


# ==========================================================
# DELETE OPERATIONS
# ==========================================================

def delete_trip(DB: Session, db_trip: Trip) -> None:
    """
    Physically remove a trip.

    Warning:
        Irreversible. Soft delete (is_driver_deleted) is the normal path.
    """
    trip_id = db_trip.id
    DB.delete(db_trip)
    DB.commit()

    print(f"[REPO] Trip permanently deleted: {trip_id}")
