from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def _is_sqlite_memory(dsn: str) -> bool:
    return dsn.startswith("sqlite") and (dsn.endswith("://") or ":memory:" in dsn)


@lru_cache(maxsize=4)
def get_engine(dsn: str) -> Engine:
    if _is_sqlite_memory(dsn):
        # one shared connection, otherwise every checkout sees an empty database
        return create_engine(dsn, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(dsn, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)
