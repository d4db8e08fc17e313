"""
Trip Lifecycle State Machine
============================

States:
    ACTIVE          visible in listings and statistics
    DRIVER_DELETED  soft-deleted, hidden from listings and statistics
    HARD_DELETED    row removed (terminal)

Transitions:
    ACTIVE -> DRIVER_DELETED            owning driver, or admin without hard flag
    DRIVER_DELETED -> DRIVER_DELETED    no-op, still reported as success
    DRIVER_DELETED -> ACTIVE            restore, admin only
    ACTIVE | DRIVER_DELETED -> HARD_DELETED
                                        admin with hard flag

A driver's hard flag is ignored; the delete becomes a soft delete.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from fleet_ledger.Models.trip import Trip
from fleet_ledger.Repositories import trip as trip_repo
from fleet_ledger.Services.trip_policy import Caller, capabilities, require_capability


class TripState(str, Enum):
    ACTIVE = "active"
    DRIVER_DELETED = "driver_deleted"
    HARD_DELETED = "hard_deleted"


@dataclass
class DeleteOutcome:
    state: TripState
    message: str
    trip: Optional[Trip] = None


def state_of(trip: Trip) -> TripState:
    return TripState.DRIVER_DELETED if trip.is_driver_deleted else TripState.ACTIVE


def soft_delete(trip: Trip, caller: Caller, now: Optional[datetime] = None) -> bool:
    """
    Mark a trip deleted in memory.

    driver_deleted_by is recorded only for driver-initiated deletes.

    Returns:
        bool: True if the trip changed, False if it was already deleted
    """
    if trip.is_driver_deleted:
        return False

    trip.is_driver_deleted = True
    trip.driver_deleted_at = now or datetime.now(timezone.utc)
    if not caller.is_admin:
        trip.driver_deleted_by = caller.id
    return True


def restore(trip: Trip, caller: Caller) -> None:
    """
    Clear the soft-delete flags in memory.

    Raises:
        ForbiddenError: Caller role may not restore
    """
    require_capability(caller, "can_restore")

    trip.is_driver_deleted = False
    trip.driver_deleted_at = None
    trip.driver_deleted_by = None


def delete(DB: Session, trip: Trip, caller: Caller, hard: bool = False) -> DeleteOutcome:
    """
    Run the delete transition the caller is entitled to and persist it.

    Args:
        DB: SQLAlchemy session
        trip: Trip the caller is already authorized to write
        caller: Authenticated caller
        hard: Hard-delete directive; only honoured for admins
    """
    if hard and capabilities(caller).can_hard_delete:
        trip_repo.delete_trip(DB, trip)
        return DeleteOutcome(TripState.HARD_DELETED, "Trip permanently deleted by admin")

    if soft_delete(trip, caller):
        trip_repo.save_trip(DB, trip)
        print(f"[LIFECYCLE] Trip {trip.id} soft-deleted by {caller.role.value} {caller.id}")

    if caller.is_admin:
        message = "Trip soft-deleted by admin"
    else:
        message = "Trip marked deleted by driver"

    return DeleteOutcome(state_of(trip), message, trip)
