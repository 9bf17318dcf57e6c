"""Rendering domain errors as HTTP responses.

Every expected failure leaves the API as
``{"error": {"kind": ..., "messages": {field: [...]}}}`` with a status code
chosen by its kind. Anything else is left to FastAPI's default 500 handling.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from campuseats.domain import logger
from campuseats.errors import CampusEatsError, ErrorKind

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.INVALID_TRANSITION: 409,
    ErrorKind.FINALIZED: 409,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.CONFLICT: 409,
}


def error_payload(kind: ErrorKind, messages: dict) -> dict:
    return {"error": {"kind": kind.value, "messages": messages}}


async def _domain_error(request: Request, exc: CampusEatsError) -> JSONResponse:
    logger.info("request rejected", path=request.url.path, kind=exc.kind.value, messages=exc.messages)
    return JSONResponse(status_code=STATUS_BY_KIND[exc.kind], content={"error": exc.to_dict()})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    messages = exc.messages if isinstance(exc.messages, dict) else {"_entity": [str(exc.messages)]}
    messages = {field: msgs if isinstance(msgs, list) else [str(msgs)] for field, msgs in messages.items()}
    logger.info("request rejected", path=request.url.path, kind=ErrorKind.VALIDATION_FAILED.value, messages=messages)
    return JSONResponse(status_code=400, content=error_payload(ErrorKind.VALIDATION_FAILED, messages))


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=error_payload(ErrorKind.NOT_FOUND, {"_entity": [str(exc)]}))


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's handlers, then the tagged-payload handlers on top."""
    register_exception_handlers(app)
    app.add_exception_handler(CampusEatsError, _domain_error)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
