"""
Notebook lifecycle repository.

The only writer of reservation/evaluation state. Each transition is a single
conditional UPDATE whose WHERE clause carries the whole precondition, so two
requests racing for the same notebook are serialized by the database and the
loser simply matches zero rows. A rejected transition returns None; store
faults propagate.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from cadernos.db import models, schemas

logger = logging.getLogger(__name__)


def _notebook_query(db: Session):
    # Volunteer and class are always joined explicitly for serialization
    return db.query(models.Notebook).options(
        joinedload(models.Notebook.volunteer),
        joinedload(models.Notebook.pep),
    )


def _conditional_update(db: Session, criteria: list, values: Dict[Any, Any]) -> int:
    """Apply `values` to notebooks matching `criteria` in one statement; return rows affected."""
    try:
        affected = (
            db.query(models.Notebook)
            .filter(*criteria)
            .update(values, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Conditional notebook update failed", exc_info=True)
        raise
    return affected


def get_notebook(db: Session, notebook_id: int) -> Optional[models.Notebook]:
    return (
        _notebook_query(db)
        .filter(models.Notebook.notebook_id == notebook_id)
        .populate_existing()
        .first()
    )


def claim_for_volunteer(
    db: Session,
    volunteer_id: int,
    notebook_id: int,
    *,
    now: Optional[datetime] = None,
) -> Optional[models.Notebook]:
    """Reserve an available notebook for a volunteer.

    Returns the refreshed notebook when this call won the claim, or None when
    the notebook was already reserved, already evaluated, or does not exist.
    """
    affected = _conditional_update(
        db,
        [
            models.Notebook.notebook_id == notebook_id,
            models.Notebook.reserved_at.is_(None),
            models.Notebook.evaluated_at.is_(None),
        ],
        {
            models.Notebook.reserved_by: volunteer_id,
            models.Notebook.reserved_at: now or models.now_utc(),
        },
    )
    if not affected:
        logger.debug("claim rejected: notebook=%s volunteer=%s", notebook_id, volunteer_id)
        return None
    logger.info("notebook_reserved: notebook=%s volunteer=%s", notebook_id, volunteer_id)
    return get_notebook(db, notebook_id)


def evaluate(
    db: Session,
    notebook_id: int,
    evaluation: schemas.EvaluateNotebook,
    *,
    now: Optional[datetime] = None,
) -> Optional[models.Notebook]:
    """Record the evaluation of a notebook reserved by the evaluating volunteer.

    The predicate requires an existing reservation held by
    ``evaluation.volunteer_id`` and no previous evaluation. Returns None when
    nothing matched.
    """
    # Content fields the evaluator left out keep their stored values
    values: Dict[Any, Any] = {
        getattr(models.Notebook, field): value
        for field, value in evaluation.model_dump(exclude={"volunteer_id"}, exclude_unset=True).items()
    }
    values[models.Notebook.conclusion] = evaluation.conclusion
    values[models.Notebook.archives_exclusion] = evaluation.archives_exclusion
    values[models.Notebook.evaluated_at] = now or models.now_utc()

    affected = _conditional_update(
        db,
        [
            models.Notebook.notebook_id == notebook_id,
            models.Notebook.evaluated_at.is_(None),
            models.Notebook.reserved_at.isnot(None),
            models.Notebook.reserved_by == evaluation.volunteer_id,
        ],
        values,
    )
    if not affected:
        logger.debug("evaluation rejected: notebook=%s volunteer=%s", notebook_id, evaluation.volunteer_id)
        return None
    logger.info("notebook_evaluated: notebook=%s volunteer=%s", notebook_id, evaluation.volunteer_id)
    return get_notebook(db, notebook_id)


def list_available(db: Session) -> List[models.Notebook]:
    return (
        _notebook_query(db)
        .filter(
            models.Notebook.reserved_at.is_(None),
            models.Notebook.evaluated_at.is_(None),
        )
        .order_by(models.Notebook.notebook_id)
        .all()
    )


def list_reserved_by(db: Session, volunteer_id: int) -> List[models.Notebook]:
    return (
        _notebook_query(db)
        .filter(
            models.Notebook.reserved_by == volunteer_id,
            models.Notebook.evaluated_at.is_(None),
        )
        .order_by(models.Notebook.notebook_id)
        .all()
    )


def count_evaluated_by(db: Session, volunteer_id: int) -> int:
    count = (
        db.query(func.count(models.Notebook.notebook_id))
        .filter(
            models.Notebook.reserved_by == volunteer_id,
            models.Notebook.evaluated_at.isnot(None),
        )
        .scalar()
    )
    return int(count or 0)
