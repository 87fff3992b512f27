"""Business logic services package with public service helpers."""

from .errors import (
    NotebookServiceError,
    VolunteerNotFoundError,
    NotebookNotFoundError,
    NotebookAlreadyReservedError,
    NotebookAlreadyEvaluatedError,
    NotebookNotReservedByVolunteerError,
)
from .notebook_service import NotebookService

__all__ = [
    "NotebookService",
    "NotebookServiceError",
    "VolunteerNotFoundError",
    "NotebookNotFoundError",
    "NotebookAlreadyReservedError",
    "NotebookAlreadyEvaluatedError",
    "NotebookNotReservedByVolunteerError",
]
