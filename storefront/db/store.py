from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar
from sqlalchemy import delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, col, select
from storefront.core.clock import utc_now
from storefront.core.errors import LimitExceeded, StoreError

ModelT = TypeVar("ModelT", bound=SQLModel)

UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


@dataclass
class UpdateResult:
    matched_count: int
    modified_count: int


@dataclass
class DeleteResult:
    deleted_count: int


class DocumentStore(Generic[ModelT]):
    """Filter based find/insert/update/delete over a single SQLModel table.

    Filters are keyword equality matches on column names. Every database
    failure is rolled back and surfaced as :class:`StoreError`.
    """

    def __init__(self, session: Session, model: Type[ModelT]):
        self.session = session
        self.model = model

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        # The sqlite3 driver raises OverflowError for integers past 64 bits
        except (SQLAlchemyError, OverflowError) as e:
            self.session.rollback()
            raise StoreError(f"Error {action}", str(e)) from e

    def _where(self, filters: Dict[str, Any]) -> list:
        return [col(getattr(self.model, field)) == value for field, value in filters.items()]

    def _touch(self, values: Dict[str, Any]) -> Dict[str, Any]:
        if "updated_at" in self.model.model_fields:
            values["updated_at"] = utc_now()
        return values

    def find_one(self, **filters) -> Optional[ModelT]:
        with self._guard("finding record"):
            return self.session.exec(select(self.model).where(*self._where(filters))).first()

    def find(self, **filters) -> List[ModelT]:
        with self._guard("fetching records"):
            return list(self.session.exec(select(self.model).where(*self._where(filters))).all())

    def search(self, field: str, text: str) -> List[ModelT]:
        """Case-insensitive substring match on one column.

        ``%`` and ``_`` in ``text`` match themselves, not any character.
        """
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        with self._guard("searching records"):
            column = col(getattr(self.model, field))
            condition = column.ilike(f"%{escaped}%", escape="\\")
            return list(self.session.exec(select(self.model).where(condition)).all())

    def insert_one(self, record: ModelT) -> ModelT:
        with self._guard("inserting record"):
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        return record

    def update_one(self, filters: Dict[str, Any], fields: Dict[str, Any]) -> UpdateResult:
        record = self.find_one(**filters)
        if record is None:
            return UpdateResult(matched_count=0, modified_count=0)

        changes = {field: value for field, value in fields.items() if getattr(record, field) != value}
        if not changes:
            return UpdateResult(matched_count=1, modified_count=0)

        with self._guard("updating record"):
            result = self.session.exec(
                update(self.model)
                .where(col(self.model.id) == record.id, *self._where(filters))
                .values(**self._touch(changes))
            )
            self.session.commit()
        # The row may have been deleted between the lookup and the update
        return UpdateResult(matched_count=result.rowcount, modified_count=result.rowcount)

    def delete_one(self, **filters) -> DeleteResult:
        record = self.find_one(**filters)
        if record is None:
            return DeleteResult(deleted_count=0)

        with self._guard("deleting record"):
            result = self.session.exec(delete(self.model).where(col(self.model.id) == record.id))
            self.session.commit()
        return DeleteResult(deleted_count=result.rowcount)

    def delete_many(self, **filters) -> DeleteResult:
        with self._guard("deleting records"):
            result = self.session.exec(delete(self.model).where(*self._where(filters)))
            self.session.commit()
        return DeleteResult(deleted_count=result.rowcount)

    def upsert_increment(
        self, keys: Dict[str, Any], field: str, by: int, limit: Optional[int] = None
    ) -> Tuple[ModelT, bool]:
        """Insert a new record for ``keys`` or add ``by`` to ``field`` of the existing one.

        Runs as a single ``INSERT ... ON CONFLICT DO UPDATE`` statement, so
        the ``keys`` columns must be covered by a unique constraint. Returns
        the stored record and whether it was created.

        With ``limit`` the increment only applies while the new total stays
        within it; otherwise the record is left untouched and
        :class:`LimitExceeded` is raised.
        """
        if limit is not None and by > limit:
            raise LimitExceeded(field, limit)
        dialect = self.session.get_bind().dialect.name
        insert = UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise StoreError("Error upserting record", f"atomic upsert is not supported on {dialect}")

        # Instantiating the model applies its default factories (id, timestamps)
        seed = self.model(**keys, **{field: by})
        values = seed.model_dump()
        column = self.model.__table__.c[field]

        stmt = insert(self.model.__table__).values(**values)
        total = column + stmt.excluded[field]
        stmt = stmt.on_conflict_do_update(
            index_elements=list(keys),
            set_=self._touch({field: total}),
            where=(total <= limit) if limit is not None else None,
        )

        with self._guard("upserting record"):
            result = self.session.exec(stmt)
            self.session.commit()
        # No row is written when the conflict update is filtered out
        if limit is not None and result.rowcount == 0:
            raise LimitExceeded(field, limit)

        record = self.find_one(**keys)
        if record is None:
            raise StoreError("Error upserting record", "record vanished after upsert")
        return record, record.id == seed.id
