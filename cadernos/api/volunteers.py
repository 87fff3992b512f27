"""
Volunteers API endpoints.

Read-only lookups used by the frontend before reserving a notebook.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from cadernos.db import schemas
from cadernos.db.database import get_db
from cadernos.db.repositories import volunteers as volunteer_repo

router = APIRouter(prefix="/volunteers", tags=["volunteers"])


@router.get("/{volunteer_id}", response_model=schemas.Volunteer)
def get_volunteer_endpoint(volunteer_id: int, db: Session = Depends(get_db)):
    volunteer = volunteer_repo.get_volunteer(db, volunteer_id)
    if not volunteer:
        raise HTTPException(
            status_code=404,
            detail={"name": "VOLUNTEER_NOT_FOUND", "message": f"Volunteer with id {volunteer_id} not found"},
        )
    return volunteer


@router.head("/email/{email}")
def check_existing_email_endpoint(email: str, db: Session = Depends(get_db)):
    """200 when a volunteer with this email exists, 404 otherwise."""
    if not volunteer_repo.get_volunteer_by_email(db, email):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_200_OK)
