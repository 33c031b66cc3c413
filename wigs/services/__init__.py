"""Service layer — business logic orchestration.

Service operations return a :class:`ServiceResult` instead of raising;
the error kinds below travel inside the result and are only raised at
the HTTP boundary via :meth:`ServiceResult.unwrap`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ServiceError(Exception):
    """Base service exception."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """One or more input fields violate their constraints (-> HTTP 400)."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("input validation failed")
        self.errors = dict(errors)


class NotFoundError(ServiceError):
    """Resource not found (-> HTTP 404)."""

    def __init__(self, wig_id: int) -> None:
        super().__init__(f"wig not found. id: {wig_id}")
        self.wig_id = wig_id


class UnexpectedError(ServiceError):
    """Anything else: storage or serialization fault (-> HTTP 500)."""

    def __init__(self, details: str) -> None:
        super().__init__(f"internal error: {details}")
        self.details = details


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Tagged outcome of a service operation: a value or a ServiceError."""

    value: T | None = None
    error: ServiceError | None = None

    @classmethod
    def success(cls, value: T) -> ServiceResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> ServiceResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
