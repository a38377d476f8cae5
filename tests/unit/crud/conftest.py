"""Shared fixtures for crud unit tests"""

import pytest
from sqlmodel import Session, SQLModel

from blocksearch.crud.database import make_engine


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = make_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="save_posts")
def save_posts_fixture(engine):
    """Persist Post rows and commit so SQLRepo sessions can see them."""
    def _save(*posts):
        with Session(engine) as s:
            for p in posts:
                s.add(p)
            s.commit()
    return _save
