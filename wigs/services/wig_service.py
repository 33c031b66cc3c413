"""WigService — create, read, replace and delete goal records."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wigs.dao.wig_dao import WigDAO
from wigs.services import NotFoundError, ServiceResult, UnexpectedError, ValidationError
from wigs.services.mapping import WigInput, WigView, to_record_values, to_view
from wigs.services.validation import validate_wig

log = structlog.get_logger("wigs.service")

T = TypeVar("T")


def _store_guard(
    op: str,
) -> Callable[
    [Callable[..., Awaitable[ServiceResult[T]]]],
    Callable[..., Awaitable[ServiceResult[T]]],
]:
    """Turn a database fault raised inside *op* into an UnexpectedError result."""

    def decorator(
        fn: Callable[..., Awaitable[ServiceResult[T]]],
    ) -> Callable[..., Awaitable[ServiceResult[T]]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> ServiceResult[T]:
            try:
                return await fn(*args, **kwargs)
            except SQLAlchemyError as exc:
                log.error("wig.store_failed", op=op, exc_info=True)
                return ServiceResult.failure(UnexpectedError(type(exc).__name__))

        return wrapper

    return decorator


class WigService:
    """Stateless service for WIG CRUD.

    Every method runs inside the caller's transaction (*session*) and
    returns a :class:`ServiceResult`; nothing here raises for
    not-found or invalid input.
    """

    def __init__(self, wig_dao: WigDAO) -> None:
        self._wig_dao = wig_dao

    @_store_guard("create")
    async def create(self, session: AsyncSession, data: WigInput) -> ServiceResult[WigView]:
        errors = validate_wig(data.goal, data.description)
        if errors:
            log.info("wig.create_rejected", fields=sorted(errors))
            return ServiceResult.failure(ValidationError(errors))

        log.info("wig.create_started", goal=data.goal)
        wig = await self._wig_dao.create(session, **to_record_values(data))
        log.info("wig.created", wig_id=wig.id)
        return ServiceResult.success(to_view(wig))

    @_store_guard("list_all")
    async def list_all(self, session: AsyncSession) -> ServiceResult[list[WigView]]:
        """All records in store order; an empty list when there are none."""
        wigs = await self._wig_dao.list_all(session)
        log.debug("wig.listed", count=len(wigs))
        return ServiceResult.success([to_view(w) for w in wigs])

    @_store_guard("get")
    async def get(self, session: AsyncSession, wig_id: int) -> ServiceResult[WigView]:
        wig = await self._wig_dao.get_by_id(session, wig_id)
        if wig is None:
            return ServiceResult.failure(NotFoundError(wig_id))
        return ServiceResult.success(to_view(wig))

    @_store_guard("update")
    async def update(
        self, session: AsyncSession, wig_id: int, data: WigInput
    ) -> ServiceResult[WigView]:
        """Replace goal and description of *wig_id* wholesale.

        An omitted description clears the stored one. Concurrent updates
        of the same record are last-write-wins.
        """
        errors = validate_wig(data.goal, data.description)
        if errors:
            log.info("wig.update_rejected", wig_id=wig_id, fields=sorted(errors))
            return ServiceResult.failure(ValidationError(errors))

        log.info("wig.update_started", wig_id=wig_id)
        wig = await self._wig_dao.replace_fields(
            session, wig_id, goal=data.goal, description=data.description
        )
        if wig is None:
            return ServiceResult.failure(NotFoundError(wig_id))
        log.info("wig.updated", wig_id=wig_id)
        return ServiceResult.success(to_view(wig))

    @_store_guard("delete")
    async def delete(self, session: AsyncSession, wig_id: int) -> ServiceResult[None]:
        log.info("wig.delete_started", wig_id=wig_id)
        if not await self._wig_dao.exists(session, wig_id):
            return ServiceResult.failure(NotFoundError(wig_id))

        # A concurrent delete may win between the check and this statement.
        if not await self._wig_dao.delete(session, wig_id):
            log.warning("wig.delete_raced", wig_id=wig_id)
            return ServiceResult.failure(NotFoundError(wig_id))

        log.info("wig.deleted", wig_id=wig_id)
        return ServiceResult.success(None)
