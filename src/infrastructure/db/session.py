from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.infrastructure.db.base import Base


def create_engine(database_url: str) -> Engine:
    return sa_create_engine(database_url, echo=False, future=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata
    from src.infrastructure.db.orm import kv_entry  # noqa: F401

    Base.metadata.create_all(engine)
