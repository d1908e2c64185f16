"""Store — the org-roam database handle injected into every service.

Owns the read-only engine. A closure computation holds one connection
from :meth:`Store.connect` for its whole traversal; the engine is created
lazily so a missing database is reported before anything is opened.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from roamclosure.infrastructure.database.engine import create_store_engine
from roamclosure.infrastructure.database.errors import StoreQueryError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from roamclosure.config.settings import RoamSettings

logger = logging.getLogger(__name__)


class Store:
    """Read-only handle on one org-roam database file."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path.expanduser()
        self._engine: Engine | None = None

    @classmethod
    def from_settings(cls, settings: RoamSettings) -> Store:
        return cls(settings.database.location)

    @property
    def exists(self) -> bool:
        return self.db_path.is_file()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            logger.debug("Opening org-roam database %s", self.db_path)
            self._engine = create_store_engine(self.db_path)
        return self._engine

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Yield a single read connection.

        Raises:
            StoreQueryError: The database could not be opened.
        """
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as exc:
            msg = f"Cannot open org-roam database {self.db_path}: {exc}"
            raise StoreQueryError(msg) from exc
        with conn:
            yield conn

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
