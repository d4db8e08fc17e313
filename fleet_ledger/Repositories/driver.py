# fleet_ledger/Repositories/driver.py

"""
Driver Repository Module

Read access to the driver registry for the reference resolver, plus the
registration helper used when seeding drivers.

Usage:
    from fleet_ledger.Repositories import driver as driver_repo

    driver = driver_repo.get_driver_by_id(db, "5f0c...")
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional

from fleet_ledger.Core.errors import ConflictError
from fleet_ledger.Models.driver import Driver
from fleet_ledger.Schemas.driver import Driver_create


def get_driver_by_id(db: Session, driver_id: str) -> Optional[Driver]:
    return db.query(Driver).filter(Driver.id == driver_id).first()


def get_driver_by_email(db: Session, email: str) -> Optional[Driver]:
    return db.query(Driver).filter(Driver.email == email).first()


def create_driver(db: Session, driver: Driver_create) -> Driver:
    """
    Register a new driver.

    Raises:
        ConflictError: Email already registered
    """
    if get_driver_by_email(db, driver.email):
        raise ConflictError("Driver email already exists")

    new_driver = Driver(**driver.model_dump())
    db.add(new_driver)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise ConflictError("Driver email already exists")

    db.refresh(new_driver)
    print(f"[REPO] Driver created: {new_driver.id} ({new_driver.name})")
    return new_driver
