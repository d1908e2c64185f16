"""Read-only access to the org-roam SQLite database via SQLAlchemy Core."""

from roamclosure.infrastructure.database.engine import create_store_engine
from roamclosure.infrastructure.database.errors import StoreQueryError
from roamclosure.infrastructure.database.schema import files, links, metadata, nodes

__all__ = [
    "StoreQueryError",
    "create_store_engine",
    "files",
    "links",
    "metadata",
    "nodes",
]
