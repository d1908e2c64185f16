"""Filesystem resolution of assets referenced from notes.

Resolution is existence-dependent: a relative target is canonicalized
against the real filesystem, so an asset that was moved or deleted
produces no path at all. Callers see it only as a debug log line.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_asset_path(note_file: str | Path, asset: str | Path) -> Path | None:
    """Resolve a ``file:`` link target relative to the note that contains it.

    Absolute targets are returned unchanged. Relative targets are joined
    onto the directory of *note_file* and canonicalized (``..``, symlinks).

    Returns:
        The resolved path, or None if the target does not exist or the note
        has no parent directory.
    """
    logger.debug("Resolving asset %s referenced from %s", asset, note_file)
    asset = Path(asset)
    if asset.is_absolute():
        return asset

    note = Path(note_file)
    parent = note.parent
    if parent == note:
        logger.debug("Note %s has no parent directory, dropping asset %s", note, asset)
        return None

    try:
        return (parent / asset).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        logger.debug("Asset %s not found relative to %s, dropping", asset, note)
        return None
