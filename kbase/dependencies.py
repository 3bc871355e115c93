from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from fastapi import Depends
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from kbase.environment import Settings, load_settings


def _apply_sqlite_pragmas(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.execute("PRAGMA busy_timeout=5000")
    finally:
        cursor.close()


@lru_cache(maxsize=8)
def _get_session_factory(db_path: str) -> sessionmaker[Session]:
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    event.listen(engine, "connect", _apply_sqlite_pragmas)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_db_session(db_path: str) -> Session:
    return _get_session_factory(db_path)()


def get_settings() -> Settings:
    return load_settings()


def get_session(settings: Settings = Depends(get_settings)) -> Iterator[Session]:
    session = create_db_session(settings.db_path)
    try:
        yield session
    finally:
        session.close()
