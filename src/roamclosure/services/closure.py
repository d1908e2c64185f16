"""Closure engine — every note and asset reachable from a set of seeds.

Breadth-first traversal over ``"id"`` links with early exclusion. The
exclusion predicate only stops *expansion*: a note that is excluded still
appears in the result once it has been discovered, but nothing behind it
is followed and none of its assets are collected.

:func:`compute_closure` is the engine; :class:`ClosureService` adapts it
to :class:`ServiceResult` for the CLI.
"""

from __future__ import annotations

import fnmatch
import logging
from collections import deque
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, TypeAlias

from roamclosure.domain.files import ReferencedFiles, RoamFile
from roamclosure.infrastructure.database.errors import StoreQueryError
from roamclosure.infrastructure.references import (
    ReferenceQueries,
    find_files_referenced_by,
    find_known_files,
)
from roamclosure.services.base import BaseService
from roamclosure.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy import Connection

logger = logging.getLogger(__name__)

ExcludePredicate: TypeAlias = Callable[[RoamFile], bool]


def never_exclude(_note: RoamFile) -> bool:
    return False


def exclude_matching(patterns: Iterable[str]) -> ExcludePredicate:
    """Build a predicate excluding notes whose path matches any glob in *patterns*.

    Patterns use :mod:`fnmatch` syntax; ``*`` also matches ``/``, so
    ``*/private/*`` excludes every note below any ``private`` directory.
    """
    compiled = tuple(patterns)
    if not compiled:
        return never_exclude

    def exclude(note: RoamFile) -> bool:
        return any(fnmatch.fnmatchcase(note.path, pattern) for pattern in compiled)

    return exclude


def compute_closure(
    conn: Connection,
    seeds: Sequence[RoamFile],
    exclude: ExcludePredicate = never_exclude,
) -> ReferencedFiles:
    """Compute the transitive closure of *seeds* over org-roam references.

    Args:
        conn: Read connection held for the whole traversal.
        seeds: Starting notes. Duplicates are dropped, first occurrence wins.
        exclude: Notes for which this returns True are not expanded.

    Returns:
        All discovered notes (seed order, then breadth-first discovery
        order) and the union of assets of every expanded note.

    Raises:
        StoreQueryError: Any lookup failed. No partial result is produced.
    """
    queries = ReferenceQueries()
    visited: set[RoamFile] = set()
    frontier: deque[RoamFile] = deque()
    notes: list[RoamFile] = []
    assets: set[Path] = set()

    for seed in seeds:
        if seed not in visited:
            logger.info("Starting from file: %s", seed)
            visited.add(seed)
            frontier.append(seed)
            notes.append(seed)

    while frontier:
        current = frontier.popleft()
        logger.debug("Processing file: %s", current)
        if exclude(current):
            logger.debug("File %s does not pass filter, skipping", current)
            continue

        found = find_files_referenced_by(conn, current, queries)
        for referenced in found.notes:
            if referenced not in visited:
                visited.add(referenced)
                frontier.append(referenced)
                notes.append(referenced)
        assets.update(found.assets)

    return ReferencedFiles(notes=notes, assets=list(assets))


class ClosureService(BaseService):
    """Closure and single-note reference queries against the org-roam store."""

    def closure(
        self,
        seeds: Sequence[RoamFile],
        *,
        exclude_patterns: Sequence[str] = (),
    ) -> ServiceResult:
        """Compute the closure of *seeds*, excluding notes matching *exclude_patterns*."""
        if (missing := self._missing_store(op="closure")) is not None:
            return missing

        warnings: list[str] = []
        try:
            with self._store.connect() as conn:
                warnings.extend(self._unknown_seed_warnings(conn, seeds))
                result = compute_closure(conn, seeds, exclude_matching(exclude_patterns))
        except StoreQueryError as exc:
            return self._store_error("closure", exc)

        return ServiceResult(
            ok=True,
            op="closure",
            data={
                "note_count": len(result.notes),
                "asset_count": len(result.assets),
                "notes": [note.path for note in result.notes],
                "assets": sorted(str(asset) for asset in result.assets),
                "excluded": list(exclude_patterns),
            },
            warnings=warnings,
        )

    def references(self, note: RoamFile) -> ServiceResult:
        """List the notes and assets *note* references directly."""
        if (missing := self._missing_store(op="references")) is not None:
            return missing

        warnings: list[str] = []
        try:
            with self._store.connect() as conn:
                warnings.extend(self._unknown_seed_warnings(conn, [note]))
                found = find_files_referenced_by(conn, note)
        except StoreQueryError as exc:
            return self._store_error("references", exc)

        return ServiceResult(
            ok=True,
            op="references",
            data={
                "source": note.path,
                "note_count": len(found.notes),
                "asset_count": len(found.assets),
                "notes": [n.path for n in found.notes],
                "assets": [str(asset) for asset in found.assets],
            },
            warnings=warnings,
        )

    @staticmethod
    def _unknown_seed_warnings(conn: Connection, seeds: Sequence[RoamFile]) -> list[str]:
        known = find_known_files(conn, list(seeds))
        unique = dict.fromkeys(seeds)
        return [f"{seed} is not indexed by org-roam" for seed in unique if seed not in known]

    @staticmethod
    def _store_error(op: str, exc: StoreQueryError) -> ServiceResult:
        logger.debug("Store query failed during %s", op, exc_info=True)
        detail = {"note": exc.note.path} if exc.note is not None else {}
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code="STORE_ERROR", message=str(exc), detail=detail),
        )
