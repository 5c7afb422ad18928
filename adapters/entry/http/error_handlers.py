from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.domain.exceptions import DomainError

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def format_validation_error(err: Dict[str, Any]) -> str:
    """
    Turn one pydantic error into "<field>: <reason>".

    Errors raised by our own validators already name the field, so their
    message is used as is.
    """
    msg = str(err.get("msg", "invalid value"))
    if msg.startswith(_VALUE_ERROR_PREFIX):
        msg = msg[len(_VALUE_ERROR_PREFIX):]
    if err.get("type") == "value_error":
        return msg

    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query", "header")]
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = format_validation_error(errors[0]) if errors else "invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return _error(400, message)


async def store_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error("MongoDB error on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, f"Database error: {exc}")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
