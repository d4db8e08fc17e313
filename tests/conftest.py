"""
Shared fixtures for the trip ledger test suite.

The application runs against an in-memory SQLite database (StaticPool, see
DB/session.py). Tables are created before and dropped after every test.
Caller tokens are signed with the same secret the app verifies with.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ALGORITHM"] = "HS256"

import jwt
import pytest
from fastapi.testclient import TestClient

from fleet_ledger.DB.database import create_all_tables, drop_all_tables
from fleet_ledger.DB.session import SessionLocal
from fleet_ledger.Repositories import driver as driver_repo
from fleet_ledger.Repositories import vehicle as vehicle_repo
from fleet_ledger.Schemas.driver import Driver_create
from fleet_ledger.Schemas.vehicle import Vehicle_create
from fleet_ledger.Services.trip_policy import Caller, Role
from fleet_ledger.main import app

ADMIN_ID = "admin-1"


def make_token(caller_id: str, role: str) -> str:
    return jwt.encode({"sub": caller_id, "role": role}, "test-secret", algorithm="HS256")


def auth_headers(caller_id: str, role: str) -> dict:
    return {"Authorization": f"Bearer {make_token(caller_id, role)}"}


# ==================== DATABASE FIXTURES ====================

@pytest.fixture(autouse=True)
def schema():
    """Fresh schema for every test."""
    create_all_tables()
    yield
    drop_all_tables()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def driver_a(db):
    return driver_repo.create_driver(db, Driver_create(name="Ravi Kumar", email="ravi@fleet.test", phone="9000000001"))


@pytest.fixture
def driver_b(db):
    return driver_repo.create_driver(db, Driver_create(name="Sunita Rao", email="sunita@fleet.test", phone="9000000002"))


@pytest.fixture
def vehicle(db):
    return vehicle_repo.create_vehicle(db, Vehicle_create(vehicle_type="Innova", vehicle_number="KA-01-AB-1234"))


# ==================== CALLER FIXTURES ====================

@pytest.fixture
def admin_caller():
    return Caller(id=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture
def driver_caller(driver_a):
    return Caller(id=driver_a.id, role=Role.DRIVER)


# ==================== HTTP FIXTURES ====================

@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return auth_headers(ADMIN_ID, "admin")


@pytest.fixture
def driver_a_headers(driver_a):
    return auth_headers(driver_a.id, "driver")


@pytest.fixture
def driver_b_headers(driver_b):
    return auth_headers(driver_b.id, "driver")


@pytest.fixture
def trip_payload():
    return {
        "fromLocation": "Bengaluru Airport",
        "endLocation": "Mysuru",
        "startDate": "2025-03-01T06:30:00",
        "customerName": "Anil",
        "customerNumber": "98765 43210",
        "tripAmount": 4500,
        "fuelAmount": "1200",
        "tolls": 250,
        "parkingCharges": 50,
        "driverBeta": 300,
        "paymentMode": "upi",
        "bookingId": "BK-1001",
    }
