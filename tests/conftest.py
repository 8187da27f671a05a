# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys

# Make repo root importable as "boardview"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from boardview.crud.mutator import UndoRegistry
from boardview.db import Base
from boardview.main import app

TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    connection = engine.connect()
    trans = connection.begin()
    try:
        session = TestingSessionLocal(bind=connection)
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(db_session):
    from boardview.db.session import get_db  # late import to avoid circulars

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    # undo stacks must not leak between tests
    app.state.undo_registry = UndoRegistry()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
