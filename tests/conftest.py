import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from fastapi.testclient import TestClient

import cadernos.db.database as db_module
from cadernos.api.main import app
from cadernos.db import models


# File-backed sqlite per test: every session gets its own connection, so
# threads racing on the same row go through sqlite's writer lock exactly as
# separate server processes would.
@pytest.fixture
def _engine(tmp_path):
    url = f"sqlite+pysqlite:///{tmp_path / 'cadernos.db'}"
    engine = create_engine(url, connect_args={"check_same_thread": False, "timeout": 30})
    models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(_engine):
    return sessionmaker(bind=_engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# Backwards compatibility: some tests expect a 'db' fixture name
@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client(session_factory):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[db_module.get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(db_module.get_db, None)


@pytest.fixture
def volunteer_factory(db_session: Session):
    counter = {"n": 0}

    def _create(name: str = None, email: str = None):
        counter["n"] += 1
        n = counter["n"]
        volunteer = models.Volunteer(
            name=name or f"Volunteer {n}",
            email=email or f"volunteer{n}@example.com",
        )
        db_session.add(volunteer)
        db_session.commit()
        db_session.refresh(volunteer)
        return volunteer
    return _create


@pytest.fixture
def pep_factory(db_session: Session):
    def _create(name: str = "PEP Turma A", directory: str = "drive/pep-turma-a"):
        pep = models.Pep(name=name, directory=directory)
        db_session.add(pep)
        db_session.commit()
        db_session.refresh(pep)
        return pep
    return _create


@pytest.fixture
def notebook_factory(db_session: Session):
    def _create(pep=None, student_name: str = "Maria Souza", **fields):
        notebook = models.Notebook(
            student_name=student_name,
            student_registration=fields.pop("student_registration", "123456"),
            student_prison_unit=fields.pop("student_prison_unit", "Unidade Prisional I"),
            class_id=pep.class_id if pep is not None else None,
            **fields,
        )
        db_session.add(notebook)
        db_session.commit()
        db_session.refresh(notebook)
        return notebook
    return _create
