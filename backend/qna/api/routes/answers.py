"""Answer Routes — read and delete single answers.

Invariants:
    - Answer ids in the path are positive integers (validated before any store call)
    - Answers are created under /questions/{id}/answers/, never here
"""

from fastapi import APIRouter, Depends, Request

from qna.api.request_log import RequestOutcome
from qna.api.routes.handler_helpers import (
    call_service, get_app_settings, get_service, respond, respond_error,
)
from qna.api.validation import parse_positive_id
from qna.config import Settings
from qna.core.errors import QnaError
from qna.schemas.responses import AnswerOut
from qna.services.qna_service import QnaService

router = APIRouter(prefix="/answers", tags=["answers"])


@router.get("/{answer_id}")
async def get_answer(
    answer_id: str,
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    outcome = RequestOutcome.begin(request)
    try:
        aid = parse_positive_id(answer_id)
        answer = await call_service(
            request, service.get_answer(aid), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome, data=AnswerOut.model_validate(answer))


@router.delete("/{answer_id}")
async def delete_answer(
    answer_id: str,
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    outcome = RequestOutcome.begin(request)
    try:
        aid = parse_positive_id(answer_id)
        await call_service(
            request, service.delete_answer(aid), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome)
