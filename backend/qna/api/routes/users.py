"""User Routes — create, list and delete users.

Invariants:
    - POST /users/ requires a non-empty "name"
    - DELETE /users/{id} requires a UUID path segment
    - Validation failures never reach QnaService
"""

from fastapi import APIRouter, Depends, Request

from qna.api.request_log import RequestOutcome
from qna.api.routes.handler_helpers import (
    call_service, decode_body, get_app_settings, get_service, respond, respond_error,
)
from qna.api.validation import parse_uuid, require_non_empty
from qna.config import Settings
from qna.core.errors import QnaError
from qna.schemas.requests import CreateUserRequest
from qna.schemas.responses import CreateUserResponse, UserOut
from qna.services.qna_service import QnaService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/")
async def create_user(
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    outcome = RequestOutcome.begin(request)
    try:
        body = await decode_body(request, CreateUserRequest, settings.http_read_timeout)
        name = require_non_empty(body.name, "name")
        user_id = await call_service(
            request, service.create_user(name), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome, data=CreateUserResponse(user_id=user_id))


@router.get("/")
async def get_users(
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    outcome = RequestOutcome.begin(request)
    try:
        users = await call_service(
            request, service.get_users(), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome, data=[UserOut.model_validate(u) for u in users])


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    """Delete a user; the store cascades to their answers."""
    outcome = RequestOutcome.begin(request)
    try:
        user_id = parse_uuid(user_id, "id")
        await call_service(
            request, service.delete_user(user_id), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome)
