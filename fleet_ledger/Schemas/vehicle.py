# fleet_ledger/Schemas/vehicle.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Vehicle_create(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    vehicle_type: str = Field(..., min_length=1, max_length=100)
    vehicle_number: str = Field(..., min_length=1, max_length=32)
    model: Optional[str] = Field(None, max_length=100)
