# fleet_ledger/Schemas/driver.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class Driver_create(BaseModel):
    """
    Schema for registering a driver record.
    Credentials are handled by the auth service and are not stored here.
    """
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=r'^[^@\s]+@[^@\s]+\.[^@\s]+$', max_length=254)
    phone: Optional[str] = Field(None, max_length=32)
    is_active: bool = True


class Driver_get(Driver_create):
    id: str
    created_at: datetime
