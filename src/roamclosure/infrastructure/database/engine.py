"""Database engine setup for the org-roam SQLite file.

The database belongs to org-roam and is opened read-only: the file is
opened through a percent-encoded ``file:`` URI with ``mode=ro`` and every
connection sets ``query_only``. SQLAlchemy Core (not ORM) is used; the
closure only issues two selects.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine


def read_only_uri(db_path: Path) -> str:
    """SQLite URI opening *db_path* read-only.

    ``#``, ``?`` and ``%`` in the path are percent-encoded, so they can
    never end the filename early and drop ``mode=ro``.
    """
    return f"{db_path.expanduser().resolve().as_uri()}?mode=ro"


def create_store_engine(db_path: Path, *, read_only: bool = True) -> Engine:
    """Create a SQLite engine for the org-roam database at *db_path*.

    Args:
        db_path: Location of ``org-roam.db``. ``~`` is expanded.
        read_only: Open with ``mode=ro`` and ``PRAGMA query_only``. Only
            test fixtures that build a database pass False.
    """
    db_path = db_path.expanduser()
    if not read_only:
        return create_engine(f"sqlite:///{db_path}", echo=False)

    uri = read_only_uri(db_path)
    engine = create_engine(
        "sqlite://",
        creator=lambda: sqlite3.connect(uri, uri=True, check_same_thread=False),
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA query_only=ON")
        cursor.close()

    return engine
