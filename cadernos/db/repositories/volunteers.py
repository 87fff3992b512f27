"""
Volunteer repository functions.

Lookup only; volunteer accounts are created and maintained elsewhere.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from cadernos.db import models


def get_volunteer(db: Session, volunteer_id: int) -> Optional[models.Volunteer]:
    return db.query(models.Volunteer).filter(models.Volunteer.volunteer_id == volunteer_id).first()


def get_volunteer_by_email(db: Session, email: str) -> Optional[models.Volunteer]:
    return (
        db.query(models.Volunteer)
        .filter(func.lower(models.Volunteer.email) == func.lower(email))
        .first()
    )
