"""Errors raised by the store access layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roamclosure.domain.files import RoamFile


class StoreQueryError(Exception):
    """The org-roam database rejected or failed a query.

    Covers malformed statements, a missing or locked database, and rows
    that cannot be decoded. Fatal for the closure computation in progress.

    Attributes:
        note: The note whose lookup failed, when known.
    """

    def __init__(self, message: str, *, note: RoamFile | None = None) -> None:
        super().__init__(message)
        self.note = note
