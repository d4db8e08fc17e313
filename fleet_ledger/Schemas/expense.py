# fleet_ledger/Schemas/expense.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class Maintenance_create(BaseModel):
    """Workshop/service cost, optionally attributed to a driver."""
    model_config = ConfigDict(from_attributes=True)

    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    cost: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=500)
    service_date: Optional[datetime] = None


class Ad_create(BaseModel):
    """Advertising spend. Company-wide."""
    model_config = ConfigDict(from_attributes=True)

    amount: Optional[float] = Field(None, ge=0)
    platform: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    spent_on: Optional[datetime] = None
