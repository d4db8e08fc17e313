"""
Trip Service
============

One function per trip operation. Each takes the database session and the
authenticated Caller explicitly, so the whole core runs without an HTTP
request.

Write path:
    policy (authorize / strip) -> reference resolver -> repository

Every reference lookup happens before the repository is called, so a missing
driver or vehicle leaves the store untouched.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from fleet_ledger.Core.config import settings
from fleet_ledger.Core.errors import NotFoundError
from fleet_ledger.Models.trip import Trip
from fleet_ledger.Repositories import expense as expense_repo
from fleet_ledger.Repositories import trip as trip_repo
from fleet_ledger.Schemas.trip import Trip_create, Trip_update
from fleet_ledger.Services import message_link, trip_lifecycle
from fleet_ledger.Services.reference_resolver import attach_refs
from fleet_ledger.Services.trip_policy import (
    Caller,
    capabilities,
    require,
    require_capability,
    strip_protected_fields,
    visibility_scope,
)
from fleet_ledger.Services.trip_stats import TripStats, compute_stats


def _load(DB: Session, trip_id: str) -> Trip:
    trip = trip_repo.get_trip_by_id(DB, trip_id)
    if trip is None:
        raise NotFoundError("Trip not found")
    return trip


# ==========================================================
# CREATE
# ==========================================================

def create_trip(DB: Session, caller: Caller, payload: Trip_create) -> Trip:
    """
    Create a trip on behalf of the caller.

    - createdBy / createdByRole always come from the caller
    - a driver's trip is always assigned to that driver
    - admins get driver and vehicle snapshots; drivers only the vehicle's
    """
    data = payload.model_dump(exclude_unset=True)
    data["created_by"] = caller.id
    data["created_by_role"] = caller.role.value

    caps = capabilities(caller)
    if not caps.can_reassign_driver:
        data["driver_id"] = caller.id

    if data.get("driver_id") or data.get("vehicle_id"):
        data = attach_refs(DB, data, include_driver=caps.driver_snapshot_on_create)

    return trip_repo.create_trip(DB, data)


# ==========================================================
# READ
# ==========================================================

def list_trips(
    DB: Session,
    caller: Caller,
    filters: Optional[Dict[str, Any]] = None,
    sort: Optional[str] = trip_repo.DEFAULT_SORT
) -> List[Trip]:
    """List trips in the caller's visibility scope, narrowed by filters."""
    criteria = {key: value for key, value in (filters or {}).items() if value is not None}
    criteria.update(visibility_scope(caller))
    return trip_repo.list_trips(DB, sort=sort, **criteria)


def get_trip(DB: Session, caller: Caller, trip_id: str, include_deleted: bool = False) -> Trip:
    return require(caller, trip_repo.get_trip_by_id(DB, trip_id), include_deleted=include_deleted)


# ==========================================================
# UPDATE
# ==========================================================

def update_trip(DB: Session, caller: Caller, trip_id: str, payload: Trip_update) -> Trip:
    """
    Apply a partial update.

    Fields the caller's role may not set are dropped silently. Snapshots are
    refreshed when driverId or vehicleId is part of the surviving update.
    """
    trip = require(caller, trip_repo.get_trip_by_id(DB, trip_id), write=True)

    updates = strip_protected_fields(caller, payload.model_dump(exclude_unset=True))
    if updates.get("driver_id") or updates.get("vehicle_id"):
        updates = attach_refs(DB, updates)

    return trip_repo.update_trip(DB, trip, updates)


# ==========================================================
# LIFECYCLE
# ==========================================================

def delete_trip(DB: Session, caller: Caller, trip_id: str, hard: bool = False) -> trip_lifecycle.DeleteOutcome:
    trip = require(caller, trip_repo.get_trip_by_id(DB, trip_id), write=True)
    return trip_lifecycle.delete(DB, trip, caller, hard=hard)


def restore_trip(DB: Session, caller: Caller, trip_id: str) -> Trip:
    """
    Bring a soft-deleted trip back. Admin only.

    Raises:
        ForbiddenError: Non-admin caller (checked before the lookup)
        NotFoundError: Unknown trip id
    """
    require_capability(caller, "can_restore")
    trip = _load(DB, trip_id)

    trip_lifecycle.restore(trip, caller)
    trip_repo.save_trip(DB, trip)

    print(f"[LIFECYCLE] Trip {trip.id} restored by admin {caller.id}")
    return trip


# ==========================================================
# STATISTICS
# ==========================================================

def get_stats(DB: Session, caller: Caller) -> TripStats:
    """
    Financial summary over the caller's non-deleted trips.

    Maintenance is narrowed to the driver for driver callers; ads are always
    company-wide. Either source can be switched off in settings.
    """
    scope = visibility_scope(caller)
    trips = trip_repo.list_trips(DB, **scope)

    maintenance = []
    if settings.STATS_INCLUDE_MAINTENANCE:
        maintenance = expense_repo.list_maintenance(DB, driver_id=scope.get("driver_id"))

    ads = []
    if settings.STATS_INCLUDE_ADS:
        ads = expense_repo.list_ads(DB)

    return compute_stats(trips, maintenance, ads)


# ==========================================================
# OUTBOUND MESSAGING
# ==========================================================

def build_message_link(DB: Session, caller: Caller, trip_id: str, send_to: str) -> Dict[str, str]:
    require_capability(caller, "can_send_messages")
    trip = _load(DB, trip_id)
    return message_link.build_link(trip, send_to)
