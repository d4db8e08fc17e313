"""
fleet_ledger/DB/base.py
==========================
SQLAlchemy Model Registry
==========================

Imports every model so that Base.metadata is complete before Alembic
autogeneration or create_all() runs.

Models Registered:
-----------------
- Trip: trip ledger entries (the core entity)
- Driver: driver registry, read-only from the trip core
- Vehicle: vehicle registry, read-only from the trip core
- Maintenance, Ad: external expense records consumed by the stats engine

Important:
----------
Any new model class MUST be imported here.
"""

from fleet_ledger.DB.base_class import Base

# ============================================================
# MODEL IMPORTS - DO NOT REMOVE
# ============================================================
from fleet_ledger.Models.driver import Driver
from fleet_ledger.Models.vehicle import Vehicle
from fleet_ledger.Models.expense import Maintenance, Ad
from fleet_ledger.Models.trip import Trip
