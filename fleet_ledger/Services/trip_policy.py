"""
Trip Visibility & Mutation Policy
=================================

Single place where admin and driver callers are told apart. Every other
service asks this module instead of comparing role strings.

Capability table:

    capability              admin   driver
    ----------------------  ------  ------------------------------
    visibility scope        all     own trips (trip.driver_id == id)
    hard delete             yes     no (downgraded to soft delete)
    restore                 yes     no
    outbound message link   yes     no
    reassign driver         yes     no
    driver snapshot on      yes     no (own identity already known)
    create
    protected on update     -       lifecycle + authorship + driverId

A driver that is denied access to a trip gets NotFoundError, never
ForbiddenError, so probing another driver's trip id reveals nothing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from fleet_ledger.Core.errors import ForbiddenError, NotFoundError
from fleet_ledger.Models.trip import Trip


class Role(str, Enum):
    ADMIN = "admin"
    DRIVER = "driver"


class Scope(str, Enum):
    ALL = "all"
    OWN = "own"


class Decision(str, Enum):
    ALLOW_READ = "allow_read"
    ALLOW_WRITE = "allow_write"
    DENY = "deny"


@dataclass(frozen=True)
class Caller:
    """
    The authenticated caller, passed explicitly into every core operation.

    Attributes:
        id: Caller identifier (driver id for drivers)
        role: Caller role
    """
    id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


LIFECYCLE_FIELDS = frozenset({"is_driver_deleted", "driver_deleted_at", "driver_deleted_by"})
AUTHORSHIP_FIELDS = frozenset({"created_by", "created_by_role"})


@dataclass(frozen=True)
class Capabilities:
    scope: Scope
    can_hard_delete: bool
    can_restore: bool
    can_send_messages: bool
    can_reassign_driver: bool
    driver_snapshot_on_create: bool
    protected_fields: FrozenSet[str]


CAPABILITIES: Dict[Role, Capabilities] = {
    Role.ADMIN: Capabilities(
        scope=Scope.ALL,
        can_hard_delete=True,
        can_restore=True,
        can_send_messages=True,
        can_reassign_driver=True,
        driver_snapshot_on_create=True,
        protected_fields=frozenset(),
    ),
    Role.DRIVER: Capabilities(
        scope=Scope.OWN,
        can_hard_delete=False,
        can_restore=False,
        can_send_messages=False,
        can_reassign_driver=False,
        driver_snapshot_on_create=False,
        protected_fields=LIFECYCLE_FIELDS | AUTHORSHIP_FIELDS | {"driver_id"},
    ),
}


def capabilities(caller: Caller) -> Capabilities:
    return CAPABILITIES[caller.role]


def authorize(
    caller: Caller,
    trip: Trip,
    write: bool = False,
    include_deleted: bool = False
) -> Decision:
    """
    Decide whether the caller may read or write one trip.

    Args:
        caller: Authenticated caller
        trip: Loaded trip
        write: The caller intends to mutate the trip
        include_deleted: Caller explicitly asked to see soft-deleted trips
            (only consulted for reads)

    Returns:
        Decision: ALLOW_WRITE / ALLOW_READ, or DENY
    """
    caps = capabilities(caller)

    if caps.scope is Scope.OWN and str(trip.driver_id) != str(caller.id):
        return Decision.DENY

    if write:
        return Decision.ALLOW_WRITE

    # Own soft-deleted trips stay hidden from drivers unless asked for
    if caps.scope is Scope.OWN and trip.is_driver_deleted and not include_deleted:
        return Decision.DENY

    return Decision.ALLOW_READ


def require(
    caller: Caller,
    trip: Optional[Trip],
    write: bool = False,
    include_deleted: bool = False
) -> Trip:
    """
    Return the trip if the caller may access it, else raise NotFoundError.
    """
    if trip is None or authorize(caller, trip, write, include_deleted) is Decision.DENY:
        raise NotFoundError("Trip not found")
    return trip


def require_capability(caller: Caller, name: str, message: str = "Admins only") -> None:
    """
    Raise ForbiddenError unless the caller's role has the named capability.

    Example:
        require_capability(caller, "can_restore")
    """
    if not getattr(capabilities(caller), name):
        raise ForbiddenError(message)


def visibility_scope(caller: Caller) -> Dict[str, Any]:
    """
    Filter arguments that restrict a listing to what the caller may see.

    Merged last into repository filters so a driver cannot widen the scope
    with driverId or includeDeleted query parameters.
    """
    if capabilities(caller).scope is Scope.OWN:
        return {"driver_id": caller.id, "include_deleted": False}
    return {}


def strip_protected_fields(caller: Caller, updates: Dict[str, Any]) -> Dict[str, Any]:
    """Drop fields the caller's role may not set through an update."""
    protected = capabilities(caller).protected_fields
    return {key: value for key, value in updates.items() if key not in protected}
