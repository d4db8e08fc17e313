# fleet_ledger/Schemas/trip.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional, Union


def _fuel_to_text(value):
    """Store fuel amounts as text: numbers keep their plain form, notes pass through."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ============================================
# BASE SCHEMA
# ============================================
class Trip_base(BaseModel):
    """
    Client-writable trip facts shared by create and update payloads.

    JSON uses camelCase names (fromLocation, tripAmount, ...); attributes
    stay snake_case so they map 1:1 onto the ORM columns.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True
    )

    driver_id: Optional[str] = Field(None, max_length=32)
    vehicle_id: Optional[str] = Field(None, max_length=32)

    # Snapshot fields. Normally filled by the reference resolver.
    driver_name: Optional[str] = Field(None, max_length=200)
    driver_number: Optional[str] = Field(None, max_length=32)
    vehicle_type: Optional[str] = Field(None, max_length=100)
    vehicle_number: Optional[str] = Field(None, max_length=32)

    start_date: Optional[datetime] = None
    customer_name: Optional[str] = Field(None, max_length=200)
    customer_number: Optional[str] = Field(None, max_length=32)

    trip_amount: Optional[float] = Field(None, ge=0)
    fuel_amount: Optional[Union[int, float, str]] = Field(
        None,
        description="Number, or free text such as '₹500 + 2 liters@100'"
    )
    tolls: Optional[float] = Field(None, ge=0)
    parking_charges: Optional[float] = Field(None, ge=0)
    driver_beta: Optional[float] = Field(None, description="Driver bonus (+) or deduction (-)")
    payment_mode: Optional[str] = Field(None, max_length=32)
    booking_id: Optional[str] = Field(None, max_length=100)

    @field_validator("fuel_amount")
    @classmethod
    def fuel_as_text(cls, value):
        text = _fuel_to_text(value)
        if text is not None and len(text) > 200:
            raise ValueError("fuelAmount must be at most 200 characters")
        return text


# ============================================
# CREATE SCHEMA
# ============================================
class Trip_create(Trip_base):
    """
    Schema for creating trips.

    Authorship (createdBy, createdByRole) is never read from the payload;
    the service stamps it from the caller.
    """
    from_location: str = Field(..., min_length=1, max_length=300)
    end_location: str = Field(..., min_length=1, max_length=300)


# ============================================
# UPDATE SCHEMA
# ============================================
class Trip_update(Trip_base):
    """
    Schema for partial trip updates.

    Includes the server-controlled lifecycle and authorship fields so that
    admins can correct them; the policy strips them for driver callers.
    """
    from_location: Optional[str] = Field(None, min_length=1, max_length=300)
    end_location: Optional[str] = Field(None, min_length=1, max_length=300)

    is_driver_deleted: Optional[bool] = None
    driver_deleted_at: Optional[datetime] = None
    driver_deleted_by: Optional[str] = Field(None, max_length=64)
    created_by: Optional[str] = Field(None, max_length=64)
    created_by_role: Optional[str] = Field(None, pattern='^(admin|driver)$')


# ============================================
# GET SCHEMA
# ============================================
class Trip_get(BaseModel):
    """Full trip record as returned by the API."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True
    )

    id: str
    created_by: str
    created_by_role: str

    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    driver_name: Optional[str] = None
    driver_number: Optional[str] = None
    vehicle_type: Optional[str] = None
    vehicle_number: Optional[str] = None

    from_location: Optional[str] = None
    end_location: Optional[str] = None
    start_date: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_number: Optional[str] = None
    trip_amount: Optional[float] = None
    fuel_amount: Optional[str] = None
    tolls: Optional[float] = None
    parking_charges: Optional[float] = None
    driver_beta: Optional[float] = None
    payment_mode: Optional[str] = None
    booking_id: Optional[str] = None

    is_driver_deleted: bool = False
    driver_deleted_at: Optional[datetime] = None
    driver_deleted_by: Optional[str] = None

    created_at: datetime
    updated_at: Optional[datetime] = None


# ============================================
# RESPONSE ENVELOPES
# ============================================
class Trip_list_response(BaseModel):
    """Unpaginated listing: page is always 1 and limit equals total."""
    total: int
    page: int = 1
    limit: int
    rows: List[Trip_get]


class Trip_action_response(BaseModel):
    message: str
    trip: Optional[Trip_get] = None


class Trip_stats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_trips: int = 0
    total_trip_amount: float = 0
    total_expenses: float = 0
    total_maintenance: float = 0
    total_ads: float = 0
    total_profit: float = 0


class Trip_message_link(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    send_to: str
    phone: str
    message: str
    link: str
