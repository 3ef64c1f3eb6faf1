"""Generic persistence contract shared by every entity table."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence, TypeVar

RecordT = TypeVar("RecordT")


class RecordStore(Protocol[RecordT]):
    """User-scoped create/read/update/delete over one table.

    Implementations raise ``ConstraintViolation`` on insert when required
    fields are missing, ``NotFound`` when an id does not exist or belongs to
    another user, and ``PersistenceFailure`` for any other storage error.
    """

    def insert(self, record: RecordT, *, user_id: int) -> RecordT:
        """Persist ``record`` for ``user_id`` and return it with its generated id."""
        ...

    def get(self, record_id: int, *, user_id: int) -> Optional[RecordT]:
        """Return the record or ``None``."""
        ...

    def query(
        self,
        *,
        user_id: int,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[Sequence[Any]] = None,
        limit: Optional[int] = None,
    ) -> list[RecordT]:
        """Return matching records in the requested order."""
        ...

    def update(self, record_id: int, patch: Mapping[str, Any], *, user_id: int) -> RecordT:
        """Apply ``patch`` and return the updated record."""
        ...

    def delete(self, record_id: int, *, user_id: int) -> None:
        """Remove the record."""
        ...
