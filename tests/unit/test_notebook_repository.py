"""
Unit tests for the notebook lifecycle repository.

Covers claim/evaluate transitions, the availability queries and counting.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from sqlalchemy import Text, select, type_coerce
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from cadernos.db import models, schemas
from cadernos.db.repositories import notebooks as notebook_repo


def _evaluation(volunteer_id: int, **overrides) -> schemas.EvaluateNotebook:
    payload = {
        "volunteer_id": volunteer_id,
        "conclusion": "Good",
        "archives_exclusion": False,
        "subject1": "Leitura",
        "a1": "Resposta revisada",
    }
    payload.update(overrides)
    return schemas.EvaluateNotebook(**payload)


class TestClaimForVolunteer:
    def test_claim_available_notebook(self, db_session: Session, volunteer_factory, notebook_factory):
        volunteer = volunteer_factory()
        notebook = notebook_factory()
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        claimed = notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, notebook.notebook_id, now=when)

        assert claimed is not None
        assert claimed.reserved_by == volunteer.volunteer_id
        assert claimed.reserved_at is not None
        assert claimed.reserved_at.replace(tzinfo=None) == when.replace(tzinfo=None)
        assert claimed.evaluated_at is None
        assert claimed.evaluator_name == volunteer.name

    def test_second_claim_is_rejected_and_keeps_first_reservation(
        self, db_session: Session, volunteer_factory, notebook_factory
    ):
        first = volunteer_factory()
        second = volunteer_factory()
        notebook = notebook_factory()

        assert notebook_repo.claim_for_volunteer(db_session, first.volunteer_id, notebook.notebook_id) is not None
        reserved_at = notebook_repo.get_notebook(db_session, notebook.notebook_id).reserved_at

        assert notebook_repo.claim_for_volunteer(db_session, second.volunteer_id, notebook.notebook_id) is None
        # Re-claiming by the holder is also a no-op rejection
        assert notebook_repo.claim_for_volunteer(db_session, first.volunteer_id, notebook.notebook_id) is None

        current = notebook_repo.get_notebook(db_session, notebook.notebook_id)
        assert current.reserved_by == first.volunteer_id
        assert current.reserved_at == reserved_at

    def test_claim_unknown_notebook_returns_none(self, db_session: Session, volunteer_factory):
        volunteer = volunteer_factory()
        assert notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, 9999) is None

    def test_claim_evaluated_notebook_is_rejected(self, db_session: Session, volunteer_factory, notebook_factory):
        volunteer = volunteer_factory()
        other = volunteer_factory()
        notebook = notebook_factory()
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, notebook.notebook_id)
        notebook_repo.evaluate(db_session, notebook.notebook_id, _evaluation(volunteer.volunteer_id))

        assert notebook_repo.claim_for_volunteer(db_session, other.volunteer_id, notebook.notebook_id) is None
        current = notebook_repo.get_notebook(db_session, notebook.notebook_id)
        assert current.reserved_by == volunteer.volunteer_id


class TestEvaluate:
    def test_evaluate_reserved_notebook(self, db_session: Session, volunteer_factory, notebook_factory, pep_factory):
        volunteer = volunteer_factory()
        pep = pep_factory(directory="drive/turma-b")
        notebook = notebook_factory(pep=pep)
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, notebook.notebook_id)

        evaluated = notebook_repo.evaluate(
            db_session,
            notebook.notebook_id,
            _evaluation(volunteer.volunteer_id, archives_exclusion=True, a13="Última resposta"),
        )

        assert evaluated is not None
        assert evaluated.evaluated_at is not None
        assert evaluated.conclusion == "Good"
        assert evaluated.archives_exclusion is True
        assert evaluated.subject1 == "Leitura"
        assert evaluated.a1 == "Resposta revisada"
        assert evaluated.a13 == "Última resposta"
        assert evaluated.reserved_by == volunteer.volunteer_id
        assert evaluated.student_name == "Maria Souza"
        assert evaluated.notebook_directory == "drive/turma-b"

    def test_exclusion_flag_is_stored_as_sheet_text(self, db_session: Session, volunteer_factory, notebook_factory):
        volunteer = volunteer_factory()
        notebook = notebook_factory()
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, notebook.notebook_id)
        notebook_repo.evaluate(db_session, notebook.notebook_id, _evaluation(volunteer.volunteer_id))

        table = models.Notebook.__table__
        raw = db_session.execute(
            select(type_coerce(table.c["exclusão de arquivos recebidos"], Text)).where(table.c.idcad == notebook.notebook_id)
        ).scalar_one()
        assert raw == "NÃO"

    def test_evaluation_without_content_keeps_stored_content(
        self, db_session: Session, volunteer_factory, notebook_factory
    ):
        volunteer = volunteer_factory()
        notebook = notebook_factory(subject1="Leitura original", a1="Resposta original", relevant_content="Poesia")
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, notebook.notebook_id)

        evaluated = notebook_repo.evaluate(
            db_session,
            notebook.notebook_id,
            schemas.EvaluateNotebook(volunteer_id=volunteer.volunteer_id, conclusion="Good"),
        )

        assert evaluated is not None
        assert evaluated.conclusion == "Good"
        assert evaluated.archives_exclusion is False
        assert evaluated.student_prison_unit == "Unidade Prisional I"
        assert evaluated.subject1 == "Leitura original"
        assert evaluated.a1 == "Resposta original"
        assert evaluated.relevant_content == "Poesia"
        assert evaluated.student_registration == "123456"

    def test_evaluation_overwrites_only_sent_content(self, db_session: Session, volunteer_factory, notebook_factory):
        volunteer = volunteer_factory()
        notebook = notebook_factory(subject1="Leitura original", subject2="Escrita", a2=None)
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, notebook.notebook_id)

        evaluated = notebook_repo.evaluate(
            db_session,
            notebook.notebook_id,
            schemas.EvaluateNotebook(volunteer_id=volunteer.volunteer_id, conclusion="Good", subject1="Leitura revisada"),
        )

        assert evaluated.subject1 == "Leitura revisada"
        assert evaluated.subject2 == "Escrita"

    def test_second_evaluation_is_rejected_without_overwrite(
        self, db_session: Session, volunteer_factory, notebook_factory
    ):
        volunteer = volunteer_factory()
        notebook = notebook_factory()
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, notebook.notebook_id)
        first = notebook_repo.evaluate(db_session, notebook.notebook_id, _evaluation(volunteer.volunteer_id))
        first_evaluated_at = first.evaluated_at

        again = notebook_repo.evaluate(
            db_session, notebook.notebook_id, _evaluation(volunteer.volunteer_id, conclusion="Changed")
        )

        assert again is None
        current = notebook_repo.get_notebook(db_session, notebook.notebook_id)
        assert current.conclusion == "Good"
        assert current.evaluated_at == first_evaluated_at

    def test_evaluate_unreserved_notebook_is_rejected(self, db_session: Session, volunteer_factory, notebook_factory):
        volunteer = volunteer_factory()
        notebook = notebook_factory()

        assert notebook_repo.evaluate(db_session, notebook.notebook_id, _evaluation(volunteer.volunteer_id)) is None

        current = notebook_repo.get_notebook(db_session, notebook.notebook_id)
        assert current.evaluated_at is None
        assert current.reserved_at is None
        assert current.conclusion is None

    def test_evaluate_by_other_volunteer_is_rejected(self, db_session: Session, volunteer_factory, notebook_factory):
        holder = volunteer_factory()
        intruder = volunteer_factory()
        notebook = notebook_factory()
        notebook_repo.claim_for_volunteer(db_session, holder.volunteer_id, notebook.notebook_id)

        assert notebook_repo.evaluate(db_session, notebook.notebook_id, _evaluation(intruder.volunteer_id)) is None

        current = notebook_repo.get_notebook(db_session, notebook.notebook_id)
        assert current.evaluated_at is None
        assert current.reserved_by == holder.volunteer_id


class TestQueries:
    def test_list_available_excludes_reserved_and_evaluated(
        self, db_session: Session, volunteer_factory, notebook_factory
    ):
        volunteer = volunteer_factory()
        free = notebook_factory(student_name="Livre")
        reserved = notebook_factory(student_name="Reservado")
        evaluated = notebook_factory(student_name="Avaliado")
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, reserved.notebook_id)
        notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, evaluated.notebook_id)
        notebook_repo.evaluate(db_session, evaluated.notebook_id, _evaluation(volunteer.volunteer_id))

        available = notebook_repo.list_available(db_session)

        assert [n.notebook_id for n in available] == [free.notebook_id]
        assert all(n.reserved_at is None and n.evaluated_at is None for n in available)

    def test_list_reserved_by_only_returns_own_open_reservations(
        self, db_session: Session, volunteer_factory, notebook_factory
    ):
        mine = volunteer_factory()
        theirs = volunteer_factory()
        open_mine = notebook_factory()
        done_mine = notebook_factory()
        open_theirs = notebook_factory()
        notebook_factory()
        notebook_repo.claim_for_volunteer(db_session, mine.volunteer_id, open_mine.notebook_id)
        notebook_repo.claim_for_volunteer(db_session, mine.volunteer_id, done_mine.notebook_id)
        notebook_repo.evaluate(db_session, done_mine.notebook_id, _evaluation(mine.volunteer_id))
        notebook_repo.claim_for_volunteer(db_session, theirs.volunteer_id, open_theirs.notebook_id)

        reserved = notebook_repo.list_reserved_by(db_session, mine.volunteer_id)

        assert [n.notebook_id for n in reserved] == [open_mine.notebook_id]
        assert all(n.reserved_by == mine.volunteer_id for n in reserved)

    def test_count_evaluated_by(self, db_session: Session, volunteer_factory, notebook_factory):
        volunteer = volunteer_factory()
        other = volunteer_factory()
        notebooks = [notebook_factory() for _ in range(3)]

        assert notebook_repo.count_evaluated_by(db_session, volunteer.volunteer_id) == 0

        for nb in notebooks[:2]:
            notebook_repo.claim_for_volunteer(db_session, volunteer.volunteer_id, nb.notebook_id)
            notebook_repo.evaluate(db_session, nb.notebook_id, _evaluation(volunteer.volunteer_id))
        notebook_repo.claim_for_volunteer(db_session, other.volunteer_id, notebooks[2].notebook_id)

        assert notebook_repo.count_evaluated_by(db_session, volunteer.volunteer_id) == 2
        assert notebook_repo.count_evaluated_by(db_session, other.volunteer_id) == 0

    def test_get_notebook_missing(self, db_session: Session):
        assert notebook_repo.get_notebook(db_session, 424242) is None


class TestStoreFaults:
    def test_fault_rolls_back_and_propagates(self):
        db = MagicMock()
        fault = OperationalError("UPDATE cadernos", {}, Exception("server closed the connection"))
        db.query.return_value.filter.return_value.update.side_effect = fault

        with pytest.raises(OperationalError):
            notebook_repo.claim_for_volunteer(db, 1, 1)

        db.rollback.assert_called_once()
        db.commit.assert_not_called()

    def test_fault_during_commit_is_not_retried(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.update.return_value = 1
        db.commit.side_effect = OperationalError("COMMIT", {}, Exception("timeout"))

        with pytest.raises(OperationalError):
            notebook_repo.evaluate(db, 1, _evaluation(1))

        assert db.query.return_value.filter.return_value.update.call_count == 1
        db.rollback.assert_called_once()
