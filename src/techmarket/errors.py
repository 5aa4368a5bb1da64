"""HTTP error mapping for domain exceptions.

Every error response is ``{"message": str, "errors": {field: [messages]}}``:

    ValidationError, RequestValidationError  -> 400
    ObjectNotFoundError                      -> 404
    ExpectedVersionError                     -> 409
    anything else                            -> 500
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


def _field_errors(exc):
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        errors = {}
        for field, msgs in messages.items():
            errors[str(field)] = [str(m) for m in msgs] if isinstance(msgs, (list, tuple)) else [str(msgs)]
        return errors
    return {}


def _describe(exc, default):
    messages = getattr(exc, "messages", None)
    if isinstance(messages, str) and messages:
        return messages
    if exc.args and isinstance(exc.args[0], str) and exc.args[0]:
        return exc.args[0]
    return default


def _first_message(errors, default):
    for msgs in errors.values():
        if msgs:
            return msgs[0]
    return default


def error_body(message, errors=None):
    return {"message": message, "errors": errors or {}}


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    errors = _field_errors(exc)
    message = _first_message(errors, _describe(exc, "Invalid request"))
    logger.info("Request rejected", path=request.url.path, errors=errors)
    return JSONResponse(status_code=400, content=error_body(message, errors))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        errors.setdefault(location or "request", []).append(error.get("msg", "Invalid value"))
    message = _first_message(errors, "Invalid request")
    logger.info("Request rejected", path=request.url.path, errors=errors)
    return JSONResponse(status_code=400, content=error_body(message, errors))


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=error_body(_describe(exc, "Not found")))


async def handle_version_conflict(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("Concurrent update rejected", path=request.url.path, detail=str(exc))
    return JSONResponse(
        status_code=409,
        content=error_body("The record was modified by another request, retry the operation"),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(ExpectedVersionError, handle_version_conflict)
    app.add_exception_handler(Exception, handle_unexpected_error)
