# tests/database/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from tagshelf.database.core.main import build_engine
from tagshelf.database.models import Base


@pytest.fixture()
def db_engine(settings):
    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test SQLAlchemy Session bound to a transaction (rolled back after each test).
    For repo-level tests that bypass the store and its lock.
    """
    connection = db_engine.connect()
    trans = connection.begin()
    session = Session(bind=connection)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()
