"""
Notebooks API endpoints.

Reservation, evaluation and listing for volunteers grading notebooks.
Conflicts caused by racing volunteers surface as 409.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cadernos.db import schemas
from cadernos.db.database import get_db
from cadernos.services import (
    NotebookService,
    NotebookServiceError,
    VolunteerNotFoundError,
    NotebookNotFoundError,
)

router = APIRouter(prefix="/notebooks", tags=["notebooks"])


def _http_error(exc: NotebookServiceError) -> HTTPException:
    if isinstance(exc, VolunteerNotFoundError):
        code = status.HTTP_412_PRECONDITION_FAILED
    elif isinstance(exc, NotebookNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_409_CONFLICT
    return HTTPException(status_code=code, detail=exc.to_detail())


@router.get("/count/{volunteer_id}", response_model=schemas.EvaluatedCount)
def count_evaluated_notebooks_endpoint(volunteer_id: int, db: Session = Depends(get_db)):
    """Total of notebooks evaluated by a volunteer."""
    return {"count": NotebookService(db).count_evaluated_by(volunteer_id)}


@router.get("/available/{volunteer_id}", response_model=List[schemas.AvailableNotebookRow])
def get_accessible_notebooks_endpoint(volunteer_id: int, db: Session = Depends(get_db)):
    """Notebooks the volunteer may grade: their open reservations, then every unreserved one."""
    return NotebookService(db).list_accessible(volunteer_id)


@router.get("/{notebook_id}", response_model=schemas.Notebook)
def get_notebook_endpoint(notebook_id: int, db: Session = Depends(get_db)):
    try:
        return NotebookService(db).get_notebook(notebook_id)
    except NotebookServiceError as exc:
        raise _http_error(exc)


@router.post("/reservation", response_model=schemas.AvailableNotebookRow)
def reserve_notebook_endpoint(payload: schemas.ReserveNotebook, db: Session = Depends(get_db)):
    """Reserve a notebook for the volunteer.

    412 when the volunteer does not exist, 404 for an unknown notebook and
    409 when it was already reserved or evaluated.
    """
    try:
        return NotebookService(db).reserve(payload.volunteer_id, payload.notebook_id)
    except NotebookServiceError as exc:
        raise _http_error(exc)


@router.put("/evaluation/{notebook_id}", response_model=schemas.Notebook)
def evaluate_notebook_endpoint(
    notebook_id: int,
    evaluation: schemas.EvaluateNotebook,
    db: Session = Depends(get_db),
):
    try:
        return NotebookService(db).evaluate(notebook_id, evaluation)
    except NotebookServiceError as exc:
        raise _http_error(exc)
