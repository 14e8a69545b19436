"""JSON request body guard.

The guard runs one pass per request: content type check, bounded read,
decode into a pydantic model and validation. Every failure is raised as a
``GuardFailure`` carrying the HTTP status and a plain-text message; a request
that is not JSON at all is forwarded instead of failed.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.requests import ClientDisconnect

from config import settings
from jsonguard.utils.errors import (
    DecodeCategory,
    GuardFailure,
    JsonDecodeFailure,
    RequestForwarded,
    ResourceValidationFailure,
)
from jsonguard.utils.validation import handle_validation_errors, is_shape_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

JSON_MEDIA_TYPE = "application/json"

# Client disconnect, stream already consumed, body not valid UTF-8
READ_FAILURES = (ClientDisconnect, RuntimeError, UnicodeDecodeError)


def is_json_content_type(content_type: str | None) -> bool:
    """Check a Content-Type header value, ignoring parameters like charset."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == JSON_MEDIA_TYPE


async def read_limited_body(request: Request, limit: int) -> str:
    """Read at most ``limit`` bytes of the body and decode them as UTF-8.

    Streaming stops as soon as the limit is reached, so an oversized body is
    never held in memory. Bytes past the limit are dropped.
    """
    buffer = bytearray()
    async for chunk in request.stream():
        buffer.extend(chunk[: limit - len(buffer)])
        if len(buffer) >= limit:
            break
    return buffer.decode("utf-8")


async def read_body_or_fail(request: Request, limit: int) -> str:
    """Bounded read that turns any read failure into a 500 ``GuardFailure``."""
    try:
        return await read_limited_body(request, limit)
    except READ_FAILURES as exc:
        logger.warning(
            "Failed to read request body",
            extra={"path": request.url.path, "error": type(exc).__name__},
        )
        raise GuardFailure(500, repr(exc)) from exc


def classify_decode_error(exc: ValidationError) -> DecodeCategory | None:
    """Map a pydantic error to a decode category.

    Returns None when every error is a rule violation, i.e. the document
    decoded fine and only validation failed.
    """
    errors = exc.errors(include_url=False)
    for error in errors:
        if error["type"] == "json_invalid":
            if "EOF" in error["msg"]:
                return DecodeCategory.EOF
            return DecodeCategory.SYNTAX
    if any(is_shape_error(error) for error in errors):
        return DecodeCategory.DATA
    return None


def decode_json(body: str, model: type[ModelT]) -> ModelT:
    """Decode a JSON document into ``model`` and check its rules."""
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        category = classify_decode_error(exc)
        if category is None:
            raise ResourceValidationFailure(handle_validation_errors(exc)) from exc
        raise JsonDecodeFailure(category, str(exc)) from exc
    except OSError as exc:
        raise JsonDecodeFailure(DecodeCategory.IO, str(exc)) from exc


async def validate_json_request(
    request: Request, model: type[ModelT], limit: int | None = None
) -> ModelT:
    """Guard a request whose body should be a JSON ``model``.

    Raises:
        RequestForwarded: the request does not declare a JSON content type.
        GuardFailure: the body could not be read (500), decoded
            (400/422/500) or validated (400).
    """
    content_type = request.headers.get("content-type")
    if not is_json_content_type(content_type):
        logger.debug(f"Forwarding {request.method} {request.url.path}: {content_type!r}")
        raise RequestForwarded(content_type)

    if limit is None:
        limit = settings.json_body_limit

    body = await read_body_or_fail(request, limit)

    try:
        return decode_json(body, model)
    except GuardFailure as exc:
        logger.info(
            f"Rejected {model.__name__} body with status {exc.status_code}",
            extra={"path": request.url.path},
        )
        raise


def json_body(
    model: type[ModelT], limit: int | None = None
) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a FastAPI dependency that yields a guarded ``model`` instance.

    Example:
        async def create(note: NoteCreate = Depends(json_body(NoteCreate))): ...
    """

    async def dependency(request: Request) -> ModelT:
        return await validate_json_request(request, model, limit)

    return dependency
