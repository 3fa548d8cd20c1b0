"""Handler Helpers — body decoding, bounded service calls and error mapping shared by routes.

Invariants:
    - decode_body raises JsonParsingError for anything that is not a JSON object of the right shape
    - call_service never lets a store call outlive the client or the write timeout
    - Only VALIDATION errors reach the client with their own code and message;
      everything else becomes INTERNAL_SERVER_ERROR (NOT_FOUND optionally 404)
    - respond/respond_error always close the RequestOutcome

Design Decisions:
    - Settings and service read from app.state: built once in create_app, passed by reference
    - Body read with raw_decode: trailing bytes after the first JSON value are ignored
"""

import asyncio
import json
from typing import Any, Awaitable, TypeVar

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.requests import ClientDisconnect

from qna.api.envelope import envelope_response
from qna.api.request_log import RequestOutcome
from qna.config import Settings
from qna.core.errors import (
    ErrorCode, ErrorKind, InternalError, JsonParsingError, QnaError,
)
from qna.services.qna_service import QnaService

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

_DISCONNECT_POLL_INTERVAL = 0.1
_decoder = json.JSONDecoder()


def get_service(request: Request) -> QnaService:
    """FastAPI dependency: the QnaService built at startup."""
    return request.app.state.service


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency: the Settings the app was created with."""
    return request.app.state.settings


async def decode_body(request: Request, schema: type[M], read_timeout: float) -> M:
    """Read and decode the JSON body into schema."""
    try:
        raw = await asyncio.wait_for(request.body(), timeout=read_timeout)
    except TimeoutError:
        raise JsonParsingError(f"request body not received within {read_timeout}s")
    except ClientDisconnect:
        raise JsonParsingError("client disconnected while sending body")

    try:
        payload, _ = _decoder.raw_decode(raw.decode("utf-8").lstrip())
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise JsonParsingError(f"malformed JSON body: {e}")

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise JsonParsingError(
            f"expected a JSON object, got {type(payload).__name__}",
        )
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise JsonParsingError(f"wrong field types in body: {fields}")


async def call_service(request: Request, call: Awaitable[T], write_timeout: float) -> T:
    """Await a service call, cancelling it on client disconnect or write timeout."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + write_timeout
    task = asyncio.ensure_future(call)
    try:
        while not task.done():
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise InternalError(
                    f"store call exceeded write timeout of {write_timeout}s",
                )
            await asyncio.wait({task}, timeout=min(_DISCONNECT_POLL_INTERVAL, remaining))
            if not task.done() and await request.is_disconnected():
                raise InternalError("client disconnected, store call cancelled")
    finally:
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
    return task.result()


def respond(
    outcome: RequestOutcome, status_code: int = status.HTTP_200_OK, data: Any = None,
) -> JSONResponse:
    """Success envelope; data omitted for no-content operations."""
    outcome.finish(status_code)
    return envelope_response(status_code, data=data)


def respond_error(
    outcome: RequestOutcome, exc: QnaError, settings: Settings,
) -> JSONResponse:
    """Map a QnaError to its envelope and record it on the outcome."""
    outcome.record_error(exc)
    status_code, code, desc = map_error(exc, settings.not_found_as_404)
    outcome.finish(status_code)
    return envelope_response(status_code, error=(code, desc))


def map_error(exc: QnaError, not_found_as_404: bool = False) -> tuple[int, ErrorCode, str]:
    """HTTP status, envelope code and client-facing description for an error."""
    if exc.kind is ErrorKind.VALIDATION:
        return exc.http_status, exc.code, exc.public_message
    if exc.kind is ErrorKind.NOT_FOUND and not_found_as_404:
        return status.HTTP_404_NOT_FOUND, ErrorCode.NOT_FOUND, exc.public_message
    return (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_SERVER_ERROR,
        "internal server error",
    )
