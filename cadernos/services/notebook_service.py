"""
Notebook reservation/evaluation service.

Runs the existence checks that do not depend on the race, then hands the
race-sensitive transition to the lifecycle repository and turns a rejected
transition into a domain error.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from cadernos.db import models, schemas
from cadernos.db.repositories import notebooks as notebook_repo
from cadernos.db.repositories import volunteers as volunteer_repo
from cadernos.services.errors import (
    NotebookAlreadyEvaluatedError,
    NotebookAlreadyReservedError,
    NotebookNotFoundError,
    NotebookNotReservedByVolunteerError,
    VolunteerNotFoundError,
)

logger = logging.getLogger(__name__)


class NotebookService:
    """Service class for the notebook lifecycle."""

    def __init__(self, db: Session):
        self.db = db

    def get_notebook(self, notebook_id: int) -> models.Notebook:
        """Read a notebook's current state; used to reconcile after an ambiguous write."""
        notebook = notebook_repo.get_notebook(self.db, notebook_id)
        if notebook is None:
            raise NotebookNotFoundError(notebook_id)
        return notebook

    def reserve(self, volunteer_id: int, notebook_id: int) -> models.Notebook:
        """Claim a notebook for a volunteer.

        The existence checks are advisory; only the repository's conditional
        update decides who gets the notebook.
        """
        if volunteer_repo.get_volunteer(self.db, volunteer_id) is None:
            raise VolunteerNotFoundError(volunteer_id)
        self.get_notebook(notebook_id)

        reserved = notebook_repo.claim_for_volunteer(self.db, volunteer_id, notebook_id)
        if reserved is None:
            logger.info("Reservation rejected for notebook %s (volunteer %s)", notebook_id, volunteer_id)
            raise NotebookAlreadyReservedError(notebook_id)
        return reserved

    def evaluate(self, notebook_id: int, evaluation: schemas.EvaluateNotebook) -> models.Notebook:
        """Submit the evaluation of a notebook held by `evaluation.volunteer_id`.

        Raises NotebookNotFoundError, NotebookAlreadyEvaluatedError, or
        NotebookNotReservedByVolunteerError when the notebook is unreserved or
        held by another volunteer.
        """
        self.get_notebook(notebook_id)

        evaluated = notebook_repo.evaluate(self.db, notebook_id, evaluation)
        if evaluated is not None:
            return evaluated

        # Rejected: read back only to pick the right error
        current = notebook_repo.get_notebook(self.db, notebook_id)
        if current is None:
            raise NotebookNotFoundError(notebook_id)
        if current.evaluated_at is not None:
            logger.info("Evaluation rejected for notebook %s: already evaluated", notebook_id)
            raise NotebookAlreadyEvaluatedError(notebook_id)
        logger.info(
            "Evaluation rejected for notebook %s: not reserved by volunteer %s",
            notebook_id,
            evaluation.volunteer_id,
        )
        raise NotebookNotReservedByVolunteerError(notebook_id, evaluation.volunteer_id)

    def list_accessible(self, volunteer_id: int) -> List[models.Notebook]:
        """The volunteer's own open reservations first, then every available notebook."""
        reserved = notebook_repo.list_reserved_by(self.db, volunteer_id)
        available = notebook_repo.list_available(self.db)
        return [*reserved, *available]

    def count_evaluated_by(self, volunteer_id: int) -> int:
        return notebook_repo.count_evaluated_by(self.db, volunteer_id)
