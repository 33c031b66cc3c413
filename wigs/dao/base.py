"""Generic base DAO: ORM reads and inserts, Core-style replace and delete."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy import exists as sa_exists
from sqlalchemy.ext.asyncio import AsyncSession

from wigs.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)

_IMMUTABLE = frozenset({"id", "created_at", "updated_at"})

# Signed 64-bit, the range of a BIGINT key.
PK_MIN = -(2**63)
PK_MAX = 2**63 - 1


class BaseDAO(Generic[ModelT]):
    """Base data-access object. Subclasses set ``model`` class attribute.

    Every write is a single statement inside the caller's transaction;
    the DAO never commits.
    """

    model: type[ModelT]

    @staticmethod
    def _require_pk(pk: int) -> None:
        """Raise ValueError if *pk* is None."""
        if pk is None:
            raise ValueError("pk must not be None")

    @staticmethod
    def _storable_pk(pk: int) -> bool:
        """False for keys no row can have; the driver would reject them."""
        return PK_MIN <= pk <= PK_MAX

    def _check_columns(self, values: dict[str, Any]) -> None:
        column_keys = set(self.model.__mapper__.column_attrs.keys())
        for key in values:
            if key in _IMMUTABLE:
                raise AttributeError(f"'{key}' is immutable and cannot be updated")
            if key not in column_keys:
                raise AttributeError(f"{self.model.__name__} has no column '{key}'")

    # ── read ──────────────────────────────────────────────────────────────

    async def get_by_id(self, session: AsyncSession, pk: int) -> ModelT | None:
        self._require_pk(pk)
        if not self._storable_pk(pk):
            return None
        return await session.get(self.model, pk)

    async def list_all(self, session: AsyncSession) -> list[ModelT]:
        """Return every row in primary-key order."""
        table = self.model.__table__
        result = await session.execute(select(self.model).order_by(table.c.id))
        return list(result.scalars().all())

    async def exists(self, session: AsyncSession, pk: int) -> bool:
        """Check existence without loading the full ORM object."""
        self._require_pk(pk)
        if not self._storable_pk(pk):
            return False
        table = self.model.__table__
        stmt = select(sa_exists().where(table.c.id == pk))
        result = await session.execute(stmt)
        return result.scalar_one()

    # ── write ─────────────────────────────────────────────────────────────

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        self._check_columns(values)
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def replace(self, session: AsyncSession, pk: int, **values: Any) -> ModelT | None:
        """Overwrite *values* on row *pk* with one UPDATE ... RETURNING.

        Columns not named in *values* are left alone; ``updated_at`` is
        always bumped. Returns the fresh row, or None if *pk* matched
        nothing.
        """
        self._require_pk(pk)
        self._check_columns(values)
        if not self._storable_pk(pk):
            return None
        table = self.model.__table__
        stmt = (
            update(self.model)
            .where(table.c.id == pk)
            .values(**values, updated_at=func.now())
            .returning(self.model)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def delete(self, session: AsyncSession, pk: int) -> bool:
        """Delete row *pk*. False if no row was removed."""
        self._require_pk(pk)
        if not self._storable_pk(pk):
            return False
        stmt = delete(self.model).where(self.model.id == pk)  # type: ignore[attr-defined]
        result = await session.execute(stmt)
        return result.rowcount > 0
