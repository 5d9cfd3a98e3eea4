# repository.py
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import Column, Text, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, Field, Session, create_engine

from errors import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Whole-value string storage. The ledger never writes partial values."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class KeyValueDB(SQLModel, table=True):
    __tablename__ = "key_value"

    key: str = Field(primary_key=True, max_length=255)
    value: str = Field(sa_column=Column(Text, nullable=False))


def build_engine(db_url: str, echo: bool = False):
    is_sqlite = db_url.startswith("sqlite")
    kwargs = {
        "echo": echo,
        "pool_pre_ping": True,
        "connect_args": {},
    }
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        # Serverless Postgres: no local pool, bounded connect time
        kwargs["poolclass"] = NullPool
        kwargs["connect_args"] = {"connect_timeout": 10}
        if "sslmode=" not in db_url:
            db_url += ("&" if "?" in db_url else "?") + "sslmode=require"
    return create_engine(db_url, **kwargs)


class SqlKeyValueStore:
    """Key-value boundary on a single SQL table. SQLite by default, Postgres in hosting."""
    def __init__(self, url: str = "sqlite:///workledger.db", echo: bool = False):
        self.url = url
        self.engine = build_engine(url, echo=echo)

        # Fail fast on an unreachable server database
        if not url.startswith("sqlite"):
            try:
                with self.engine.connect() as conn:
                    conn.execute(text("select 1"))
            except SQLAlchemyError as e:
                raise PersistenceError(f"Could not connect to database: {e}") from e

        SQLModel.metadata.create_all(self.engine)

    def get(self, key: str) -> str | None:
        try:
            with Session(self.engine) as session:
                row = session.get(KeyValueDB, key)
                return None if row is None else row.value
        except SQLAlchemyError as e:
            logger.exception("Read failed for key %s", key)
            raise PersistenceError(f"Could not read {key}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(KeyValueDB, key)
                if row is None:
                    row = KeyValueDB(key=key, value=value)
                else:
                    row.value = value
                session.add(row)
                session.commit()
        except SQLAlchemyError as e:
            logger.exception("Write failed for key %s", key)
            raise PersistenceError(f"Could not write {key}") from e


__all__ = ["KeyValueStore", "KeyValueDB", "SqlKeyValueStore", "build_engine"]
