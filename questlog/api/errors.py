"""Exception handlers: every error body is {"msg": ...} for the browser client."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from questlog.core.errors import QuestlogError

logger = logging.getLogger(__name__)

DB_ERROR_MSG = "Database error. Please try again later."


def _error_body(status_code: int, message: str) -> dict[str, object]:
    body: dict[str, object] = {"msg": message}
    if status_code == status.HTTP_401_UNAUTHORIZED:
        body["auth"] = False
    return body


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Readable summary, e.g. 'Invalid request: username: Field required'."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "Invalid request: " + "; ".join(parts)


async def questlog_error_handler(request: Request, exc: QuestlogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.status_code, exc.message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": _format_validation_errors(exc)},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Driver text can leak schema details; only the error class name goes to the client.
    logger.exception("Database error on %s %s", request.method, request.url.path)
    original = getattr(exc, "orig", None)
    error_code = type(original).__name__ if original is not None else type(exc).__name__
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": DB_ERROR_MSG, "error_code": error_code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuestlogError, questlog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
