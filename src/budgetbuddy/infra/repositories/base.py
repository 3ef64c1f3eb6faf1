"""Generic SQLModel record store scoped by ``user_id``."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ClassVar, Generic, Iterator, Mapping, Optional, Sequence, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, select

from ...errors import BudgetBuddyError, ConstraintViolation, InvalidInput, NotFound, PersistenceFailure
from ...logging_config import get_logger
from ..database import SessionFactory

RecordT = TypeVar("RecordT", bound=SQLModel)

logger = get_logger(__name__)

_PROTECTED_FIELDS = frozenset({"id", "user_id"})


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise storage errors as ``PersistenceFailure`` with the cause chained."""

    try:
        yield
    except BudgetBuddyError:
        raise
    except IntegrityError as exc:
        logger.error(f"Constraint violated during {action}: {exc.orig}")
        raise ConstraintViolation(f"{action} violated a constraint: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        logger.error(f"Persistence failure during {action}: {exc}", exc_info=True)
        raise PersistenceFailure(f"{action} failed") from exc


class SQLModelRecordStore(Generic[RecordT]):
    """Insert/get/query/update/delete for one table, always filtered by owner."""

    model: ClassVar[type[SQLModel]]
    default_order: ClassVar[tuple[str, ...]] = ("id",)

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @property
    def entity(self) -> str:
        return self.model.__tablename__  # type: ignore[return-value]

    def _column(self, name: str) -> Any:
        if name not in self.model.model_fields:
            raise InvalidInput(f"{self.entity} has no field {name!r}")
        return getattr(self.model, name)

    def _order_clauses(self, order_by: Optional[Sequence[Any]]) -> list[Any]:
        clauses = []
        for item in order_by or self.default_order:
            if not isinstance(item, str):
                clauses.append(item)
            elif item.startswith("-"):
                clauses.append(self._column(item[1:]).desc())
            else:
                clauses.append(self._column(item).asc())
        return clauses

    def _scoped(self, user_id: int):
        return select(self.model).where(self.model.user_id == user_id)

    def _fetch_owned(self, session, record_id: int, user_id: int) -> RecordT:
        row = session.exec(self._scoped(user_id).where(self.model.id == record_id)).first()
        if row is None:
            raise NotFound(f"{self.entity} {record_id} not found")
        return row

    def insert(self, record: RecordT, *, user_id: int) -> RecordT:
        """Persist ``record`` for ``user_id``."""
        with translate_errors(f"insert {self.entity}"):
            with self.session_factory() as session:
                record.user_id = user_id
                session.add(record)
                session.commit()
                session.refresh(record)
                session.expunge(record)
                return record

    def get(self, record_id: int, *, user_id: int) -> Optional[RecordT]:
        """Retrieve a record by ID."""
        with translate_errors(f"get {self.entity}"):
            with self.session_factory() as session:
                row = session.exec(self._scoped(user_id).where(self.model.id == record_id)).first()
                if row:
                    session.expunge(row)
                return row

    def query(
        self,
        *,
        user_id: int,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[Sequence[Any]] = None,
        limit: Optional[int] = None,
    ) -> list[RecordT]:
        """Equality-filtered listing. Filters are ANDed; ``-field`` sorts descending."""
        statement = self._scoped(user_id)
        for name, value in (filters or {}).items():
            statement = statement.where(self._column(name) == value)
        statement = statement.order_by(*self._order_clauses(order_by))
        if limit is not None:
            statement = statement.limit(limit)
        return self._all(statement, action=f"query {self.entity}")

    def _all(self, statement, *, action: str) -> list[RecordT]:
        with translate_errors(action):
            with self.session_factory() as session:
                rows = list(session.exec(statement).all())
                session.expunge_all()
                return rows

    def update(self, record_id: int, patch: Mapping[str, Any], *, user_id: int) -> RecordT:
        """Apply ``patch`` to an owned record."""
        for name in patch:
            if name in _PROTECTED_FIELDS:
                raise InvalidInput(f"{name} cannot be changed")
            self._column(name)
        with translate_errors(f"update {self.entity}"):
            with self.session_factory() as session:
                row = self._fetch_owned(session, record_id, user_id)
                for name, value in patch.items():
                    setattr(row, name, value)
                session.add(row)
                session.commit()
                session.refresh(row)
                session.expunge(row)
                return row

    def delete(self, record_id: int, *, user_id: int) -> None:
        """Delete an owned record."""
        with translate_errors(f"delete {self.entity}"):
            with self.session_factory() as session:
                row = self._fetch_owned(session, record_id, user_id)
                session.delete(row)
                session.commit()
