"""BaseService — shared foundation for roamclosure services.

Every service receives a :class:`Store` at construction time and opens
its own connection from it. Services never write to the store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roamclosure.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from roamclosure.infrastructure.store import Store


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ClosureService(BaseService):
            def closure(self, seeds: list[RoamFile]) -> ServiceResult:
                if (missing := self._missing_store(op="closure")) is not None:
                    return missing
                with self._store.connect() as conn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    def _missing_store(self, *, op: str) -> ServiceResult | None:
        """Return a DB_NOT_FOUND result if the database file is absent."""
        if self._store.exists:
            return None
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="DB_NOT_FOUND",
                message=f"org-roam database not found at {self._store.db_path}",
                detail={"path": str(self._store.db_path)},
            ),
        )
