# fleet_ledger/Controller/Routes/trips.py

"""
Trip Ledger REST API

Endpoints:
- POST   /trips                      Create trip
- GET    /trips                      List trips (role-scoped)
- GET    /trips/stats                Revenue / expense / profit summary
- GET    /trips/{trip_id}            Get one trip
- PUT    /trips/{trip_id}            Update trip
- DELETE /trips/{trip_id}            Soft delete (hard delete: admin + ?hard=true)
- POST   /trips/{trip_id}/restore    Restore soft-deleted trip (admin)
- GET    /trips/{trip_id}/whatsapp   Chat link for customer or driver (admin)

Security:
- Every endpoint requires a bearer token (see Controller/deps.get_caller)
- Drivers only ever see their own trips; another driver's trip answers 404

Usage:
    # In main.py
    from fleet_ledger.Controller.Routes import trips
    app.include_router(trips.router, prefix="/trips", tags=["trips"])
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fleet_ledger.Controller.deps import get_DB, get_caller
from fleet_ledger.Schemas import trip as trip_schema
from fleet_ledger.Services import trip_service
from fleet_ledger.Services.trip_policy import Caller

router = APIRouter()


# ==========================================================
# 📌 Create Trip
# ==========================================================

@router.post("", response_model=trip_schema.Trip_get, status_code=201)
def create_trip(
    trip: trip_schema.Trip_create,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    Create a trip.

    Admins may assign any driver; a driver's trip is always their own.
    driverId / vehicleId are resolved into snapshot fields before saving.

    Raises:
        400: Validation error
        404: driverId or vehicleId does not exist (nothing is saved)
    """
    return trip_service.create_trip(db, caller, trip)


# ==========================================================
# ✅ SPECIAL GET ROUTES (before /{trip_id})
# ==========================================================

@router.get("", response_model=trip_schema.Trip_list_response)
def list_trips(
    sort: str = Query("-createdAt", description="Field to sort by, '-' prefix for descending"),
    driver_id: Optional[str] = Query(None, alias="driverId"),
    vehicle_id: Optional[str] = Query(None, alias="vehicleId"),
    payment_mode: Optional[str] = Query(None, alias="paymentMode"),
    start_from: Optional[datetime] = Query(None, alias="startFrom", description="startDate lower bound"),
    start_to: Optional[datetime] = Query(None, alias="startTo", description="startDate upper bound"),
    include_deleted: bool = Query(False, alias="includeDeleted", description="Admins only"),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    List trips visible to the caller, without pagination.

    Returns:
        {"total": N, "page": 1, "limit": N, "rows": [...]}

    Example Requests:
        GET /trips?sort=-startDate
        GET /trips?driverId=abc&paymentMode=cash
    """
    rows = trip_service.list_trips(
        db,
        caller,
        filters={
            "driver_id": driver_id,
            "vehicle_id": vehicle_id,
            "payment_mode": payment_mode,
            "start_from": start_from,
            "start_to": start_to,
            "include_deleted": include_deleted,
        },
        sort=sort
    )
    total = len(rows)

    return {"total": total, "page": 1, "limit": total, "rows": rows}


@router.get("/stats", response_model=trip_schema.Trip_stats)
def get_trip_stats(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    Aggregated financials over the caller's non-deleted trips.

    Returns:
        {
            "totalTrips": 2,
            "totalTripAmount": 3000,
            "totalExpenses": 371,
            "totalMaintenance": 0,
            "totalAds": 0,
            "totalProfit": 2629
        }
    """
    return trip_service.get_stats(db, caller).to_dict()


# ==========================================================
# 📌 Single Trip
# ==========================================================

@router.get("/{trip_id}", response_model=trip_schema.Trip_get)
def get_trip(
    trip_id: str,
    include_deleted: bool = Query(False, alias="includeDeleted"),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    Get one trip.

    A driver's own soft-deleted trip is 404 unless includeDeleted=true.
    """
    return trip_service.get_trip(db, caller, trip_id, include_deleted=include_deleted)


@router.put("/{trip_id}", response_model=trip_schema.Trip_get)
def update_trip(
    trip_id: str,
    trip: trip_schema.Trip_update,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    Partially update a trip.

    Drivers cannot change lifecycle fields, authorship or driverId; those keys
    are dropped without an error.
    """
    return trip_service.update_trip(db, caller, trip_id, trip)


@router.delete("/{trip_id}", response_model=trip_schema.Trip_action_response)
def delete_trip(
    trip_id: str,
    hard: bool = Query(False, description="Admins only: remove the row permanently"),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    Delete a trip.

    Drivers always soft-delete. Admins soft-delete unless hard=true.
    Deleting an already soft-deleted trip succeeds without changes.
    """
    outcome = trip_service.delete_trip(db, caller, trip_id, hard=hard)
    return {"message": outcome.message, "trip": outcome.trip}


@router.post("/{trip_id}/restore", response_model=trip_schema.Trip_action_response)
def restore_trip(
    trip_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    Restore a soft-deleted trip (admins only).

    Raises:
        403: Caller is not an admin
        404: Trip not found
    """
    trip = trip_service.restore_trip(db, caller, trip_id)
    return {"message": "Trip restored", "trip": trip}


@router.get("/{trip_id}/whatsapp", response_model=trip_schema.Trip_message_link)
def get_message_link(
    trip_id: str,
    send_to: Optional[str] = Query(None, alias="sendTo", description="'customer' or 'driver'"),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_DB)
):
    """
    Build a chat link carrying the trip summary (admins only).

    Returns:
        {"sendTo": "customer", "phone": "919876543210", "message": "...", "link": "https://wa.me/..."}
    """
    return trip_service.build_message_link(db, caller, trip_id, send_to)
