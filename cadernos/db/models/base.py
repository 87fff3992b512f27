"""
Shared SQLAlchemy base and helpers.
"""
from sqlalchemy.orm import declarative_base
from datetime import datetime, UTC


def now_utc():
    """Return an aware UTC datetime; the timestamp source for lifecycle transitions."""
    return datetime.now(UTC)


Base = declarative_base()
