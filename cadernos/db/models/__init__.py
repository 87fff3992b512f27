"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes so callers can keep using
`from cadernos.db import models`.
"""

from .base import Base, now_utc  # re-export

from .volunteers import Volunteer
from .classes import Pep
from .notebooks import Notebook

__all__ = [
    # base
    "Base",
    "now_utc",
    # volunteers
    "Volunteer",
    # classes
    "Pep",
    # notebooks
    "Notebook",
]
