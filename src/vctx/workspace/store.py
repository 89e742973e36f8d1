"""Read-only access to a workspace's ``state.vscdb`` key-value store.

The editor keeps UI state in a single SQLite table, ``ItemTable``, mapping
string keys to (usually JSON) text. We open it read-only per lookup and
never hold a connection, so the editor keeps exclusive ownership of writes.
"""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlmodel import Field, Session, SQLModel, create_engine, select

if TYPE_CHECKING:
    from sqlalchemy import Engine

log = structlog.get_logger()

# Seconds to wait on a store the editor is mid-write on
_BUSY_TIMEOUT_SEC = 1.0


class ItemTable(SQLModel, table=True):
    """The editor's key-value table. Declared for reads only, never created."""

    __tablename__ = "ItemTable"

    key: str = Field(primary_key=True)
    value: str | None = None


def _readonly_engine(store_path: Path) -> "Engine":
    uri = f"{store_path.resolve().as_uri()}?mode=ro"
    return create_engine(
        "sqlite://",
        creator=lambda: sqlite3.connect(uri, uri=True, timeout=_BUSY_TIMEOUT_SEC),
        poolclass=NullPool,
    )


def read_key(store_path: Path, key: str) -> str | None:
    """Return the stored text for ``key``, or None.

    Missing keys, missing or corrupt stores and lock timeouts all yield None.
    """
    engine = _readonly_engine(store_path)
    try:
        with Session(engine) as session:
            value = session.exec(select(ItemTable.value).where(ItemTable.key == key)).first()
    except (SQLAlchemyError, sqlite3.Error) as e:
        log.debug("state_store_unreadable", store=str(store_path), key=key, error=str(e))
        return None
    finally:
        engine.dispose()

    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    return value or None
