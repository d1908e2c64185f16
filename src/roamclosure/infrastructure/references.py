"""Reference lookup — the direct references of a single note.

Two parameterized queries against the org-roam tables, each bound to the
encoded path of the referencing note:

- notes reached through one ``"id"`` link (link dest joined back to the
  node that owns it, then to that node's file);
- raw targets of ``"file"`` links, resolved to absolute paths.

Rows come back in link position order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import bindparam, select
from sqlalchemy.exc import SQLAlchemyError

from roamclosure.domain.files import ReferencedFiles, RoamFile, decode_elisp_string
from roamclosure.infrastructure.database.errors import StoreQueryError
from roamclosure.infrastructure.database.schema import FILE_LINK, ID_LINK, files, links, nodes
from roamclosure.infrastructure.filesystem import resolve_asset_path

if TYPE_CHECKING:
    from sqlalchemy import Connection, Select

logger = logging.getLogger(__name__)


class ReferenceQueries:
    """The two lookup statements, built once and reused for every note."""

    def __init__(self) -> None:
        source_nodes = (
            select(nodes.c.id)
            .join(files, nodes.c.file == files.c.file)
            .where(files.c.file == bindparam("file"))
            .cte("source_file_node")
        )

        referenced = (
            select(links.c.dest, links.c.pos)
            .where(links.c.source.in_(select(source_nodes.c.id)))
            .where(links.c.type == ID_LINK)
            .cte("referenced_nodes")
        )
        self.notes: Select[tuple[str]] = (
            select(nodes.c.file)
            .join(referenced, nodes.c.id == referenced.c.dest)
            .order_by(referenced.c.pos)
        )

        self.assets: Select[tuple[str]] = (
            select(links.c.dest)
            .where(links.c.source.in_(select(source_nodes.c.id)))
            .where(links.c.type == FILE_LINK)
            .order_by(links.c.pos)
        )


def find_files_referenced_by(
    conn: Connection,
    note: RoamFile,
    queries: ReferenceQueries | None = None,
) -> ReferencedFiles:
    """Return the notes and assets *note* references directly.

    Assets that cannot be resolved are dropped without error.

    Raises:
        StoreQueryError: A query failed or a row could not be decoded.
    """
    queries = queries or ReferenceQueries()
    params = {"file": note.to_sql()}
    logger.debug("Querying for files referenced by %s", note)

    try:
        note_rows = conn.execute(queries.notes, params).scalars().all()
        asset_rows = conn.execute(queries.assets, params).scalars().all()
    except SQLAlchemyError as exc:
        msg = f"Reference query failed for {note}: {exc}"
        raise StoreQueryError(msg, note=note) from exc

    try:
        notes = [RoamFile.from_sql(value) for value in note_rows]
        targets = [decode_elisp_string(value) for value in asset_rows]
    except ValueError as exc:
        msg = f"Could not decode reference row for {note}: {exc}"
        raise StoreQueryError(msg, note=note) from exc

    for referenced in notes:
        logger.debug("Found referenced file: %s", referenced)

    assets = []
    for target in targets:
        logger.debug("Found referenced asset path: %s", target)
        resolved = resolve_asset_path(note.as_path(), target)
        if resolved is not None:
            logger.debug("Found referenced asset: %s", resolved)
            assets.append(resolved)

    return ReferencedFiles(notes=notes, assets=assets)


def find_known_files(conn: Connection, candidates: list[RoamFile]) -> set[RoamFile]:
    """Return the subset of *candidates* that org-roam has indexed.

    Raises:
        StoreQueryError: The query failed or a row could not be decoded.
    """
    if not candidates:
        return set()
    stmt = select(files.c.file).where(files.c.file.in_([c.to_sql() for c in candidates]))
    try:
        return {RoamFile.from_sql(value) for value in conn.execute(stmt).scalars()}
    except SQLAlchemyError as exc:
        msg = f"File lookup failed: {exc}"
        raise StoreQueryError(msg) from exc
    except ValueError as exc:
        msg = f"Could not decode file row: {exc}"
        raise StoreQueryError(msg) from exc
