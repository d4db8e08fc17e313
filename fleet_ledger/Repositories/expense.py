# fleet_ledger/Repositories/expense.py

"""
Expense Repository - maintenance and advertising records.

Read side feeds the statistics engine; create helpers are used by seeding
and tests.
"""

from sqlalchemy.orm import Session
from typing import List, Optional

from fleet_ledger.Models.expense import Maintenance, Ad
from fleet_ledger.Schemas.expense import Maintenance_create, Ad_create


def list_maintenance(db: Session, driver_id: Optional[str] = None) -> List[Maintenance]:
    """
    Get maintenance records, optionally only those attributed to one driver.
    """
    query = db.query(Maintenance)

    if driver_id:
        query = query.filter(Maintenance.driver_id == driver_id)

    return query.all()


def list_ads(db: Session) -> List[Ad]:
    return db.query(Ad).all()


def create_maintenance(db: Session, record: Maintenance_create) -> Maintenance:
    new_record = Maintenance(**record.model_dump())
    db.add(new_record)
    db.commit()
    db.refresh(new_record)
    return new_record


def create_ad(db: Session, record: Ad_create) -> Ad:
    new_record = Ad(**record.model_dump())
    db.add(new_record)
    db.commit()
    db.refresh(new_record)
    return new_record
