"""Exception handlers — render every error in the API response envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.application.schemas import ApiResponse, ValidationErrorDetail

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_from_location(loc: tuple | list) -> str:
    parts = [str(p) for p in loc if str(p) not in _LOCATION_PREFIXES]
    if parts:
        return ".".join(parts)
    return str(loc[0]) if loc else "request"


def _message_from_error(error: dict) -> str:
    message = str(error.get("msg") or "Invalid input.")
    # Model-level validators surface as "Value error, <text>"
    return message.removeprefix("Value error, ")


def _envelope(status_code: int, error: str, details: list[ValidationErrorDetail] | None = None) -> JSONResponse:
    body = ApiResponse[None](success=False, error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            ValidationErrorDetail(
                field=_field_from_location(err.get("loc", ())),
                message=_message_from_error(err),
            )
            for err in exc.errors()
        ]
        logger.debug("Validation failed for %s %s: %d error(s)", request.method, request.url.path, len(details))
        return _envelope(400, "Validation error", details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        if exc.status_code == 404 and detail == "Not Found":
            detail = "Route not found"
        return _envelope(exc.status_code, detail)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _envelope(500, "Internal server error")
