"""Unified error handling — every failure leaves the API in one envelope shape.

ServiceError kinds map to status codes here and nowhere else; request
decoding problems share the validation envelope; anything unclassified
becomes a 500 with a short description only.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wigs.api.middleware.request_id import REQUEST_ID_HEADER, request_id_of
from wigs.api.schemas.error import ErrorResponse, ValidationErrorResponse
from wigs.services import NotFoundError, ServiceError, UnexpectedError, ValidationError

log = structlog.get_logger("wigs.api")

_STATUS_MAP: dict[type[ServiceError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    UnexpectedError: 500,
}


def _error_json(status: int, message: str) -> JSONResponse:
    body = ErrorResponse(status=status, message=message)
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


def _validation_json(errors: dict[str, str]) -> JSONResponse:
    body = ValidationErrorResponse(errors=errors)
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


def _field_name(loc: tuple | list) -> str:
    """Last named segment of a pydantic error location (``body`` if none)."""
    for part in reversed(loc):
        if isinstance(part, str):
            return part
    return "body"


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return _validation_json(exc.errors)

    status = 500
    for cls in type(exc).__mro__:
        if cls in _STATUS_MAP:
            status = _STATUS_MAP[cls]
            break
    if status >= 500:
        log.error("api.service_error", path=request.url.path, error=exc.message)
    else:
        log.info("api.service_error", path=request.url.path, status=status, error=exc.message)
    return _error_json(status, exc.message)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, str] = {}
    for err in exc.errors():
        errors.setdefault(_field_name(err["loc"]), err["msg"])
    log.info("api.request_invalid", path=request.url.path, fields=sorted(errors))
    return _validation_json(errors)


async def _http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_json(exc.status_code, str(exc.detail))


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = request_id_of(request)
    log.error(
        "api.unhandled_exception",
        path=request.url.path,
        request_id=request_id,
        exc_info=exc,
    )
    response = _error_json(500, f"internal error: {type(exc).__name__}")
    # Runs outside the middleware stack, so the header is not added for us.
    if request_id is not None:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_handler)
