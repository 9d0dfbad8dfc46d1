# src/dealdesk/adapters/sql_store.py
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Column, Field, Session, SQLModel, create_engine

from dealdesk.adapters.config import AppConfig
from dealdesk.domain.errors import StorageError
from dealdesk.domain.ports import KeyValueStore


class KeyValueRow(SQLModel, table=True):
    __tablename__ = "kv_store"

    key: str = Field(primary_key=True)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)


class SqlKeyValueStore:
    """
    One row per key. Values are opaque strings (the ledger stores a JSON
    document); every set() replaces the whole value in one commit.
    """

    def __init__(self, uri: str = "sqlite:///dealdesk.db"):
        try:
            self.engine = create_engine(uri, echo=False)
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"could not open store at {uri}: {e}") from e

    def get(self, key: str) -> str | None:
        try:
            with Session(self.engine) as session:
                row = session.get(KeyValueRow, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"read failed for key {key!r}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(KeyValueRow, key)
                if row is None:
                    row = KeyValueRow(key=key, value=value)
                else:
                    row.value = value
                    row.updated_at = datetime.now(timezone.utc)
                session.add(row)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"write failed for key {key!r}: {e}") from e


def build_store(cfg: AppConfig) -> KeyValueStore:
    if cfg.STORE_BACKEND == "memory":
        from dealdesk.adapters.memory_store import InMemoryKeyValueStore

        return InMemoryKeyValueStore()
    return SqlKeyValueStore(cfg.DB_URI)
