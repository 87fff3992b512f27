"""
Domain-split Pydantic schemas.

Response models are built `from_attributes` on the ORM rows, so mapping from
storage to API shape is a pure function of the loaded row.
"""

from .volunteers import VolunteerBase, Volunteer
from .notebooks import (
    NotebookContent,
    EvaluateNotebook,
    ReserveNotebook,
    Notebook,
    AvailableNotebookRow,
    EvaluatedCount,
)

__all__ = [
    # Volunteers
    "VolunteerBase",
    "Volunteer",
    # Notebooks
    "NotebookContent",
    "EvaluateNotebook",
    "ReserveNotebook",
    "Notebook",
    "AvailableNotebookRow",
    "EvaluatedCount",
]
