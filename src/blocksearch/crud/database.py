"""Engine creation and schema initialization"""

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

import blocksearch.crud.tables  # noqa: F401  registers table metadata


def make_engine(db_url: str) -> Engine:
    """Create an engine; SQLite connections may be shared across worker threads."""
    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, echo=False, **kwargs)
    return create_engine(db_url, echo=False)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def reset_db(engine: Engine) -> None:
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


def has_schema(engine: Engine) -> bool:
    """True when the posts table exists; inspecting never creates tables."""
    return inspect(engine).has_table("posts")
