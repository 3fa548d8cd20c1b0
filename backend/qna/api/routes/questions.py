"""Question Routes — questions, the question+answers composite read, and answer creation.

Invariants:
    - Question ids in the path are positive integers (validated before any store call)
    - POST /questions/{id}/answers/ checks, in order: body, id format, id sign,
      "text" non-empty, "user_id" UUID
    - GET /questions/{id} always returns an answers list, possibly empty
"""

from fastapi import APIRouter, Depends, Request

from qna.api.request_log import RequestOutcome
from qna.api.routes.handler_helpers import (
    call_service, decode_body, get_app_settings, get_service, respond, respond_error,
)
from qna.api.validation import parse_positive_id, parse_uuid, require_non_empty
from qna.config import Settings
from qna.core.entities import Answer
from qna.core.errors import QnaError
from qna.schemas.requests import CreateAnswerToQuestionRequest, CreateQuestionRequest
from qna.schemas.responses import (
    AnswerOut,
    CreateAnswerToQuestionResponse,
    CreateQuestionResponse,
    QuestionAndAnswersResponse,
    QuestionOut,
)
from qna.services.qna_service import QnaService

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/")
async def get_questions(
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    outcome = RequestOutcome.begin(request)
    try:
        questions = await call_service(
            request, service.get_questions(), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome, data=[QuestionOut.model_validate(q) for q in questions])


@router.post("/")
async def create_question(
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    outcome = RequestOutcome.begin(request)
    try:
        body = await decode_body(request, CreateQuestionRequest, settings.http_read_timeout)
        text = require_non_empty(body.text, "text")
        question_id = await call_service(
            request, service.create_question(text), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome, data=CreateQuestionResponse(question_id=question_id))


@router.get("/{question_id}")
async def get_question_and_answers(
    question_id: str,
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    outcome = RequestOutcome.begin(request)
    try:
        qid = parse_positive_id(question_id)
        question, answers = await call_service(
            request, service.get_question_and_answers(qid), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome, data=QuestionAndAnswersResponse(
        question=QuestionOut.model_validate(question),
        answers=[AnswerOut.model_validate(a) for a in answers],
    ))


@router.delete("/{question_id}")
async def delete_question_and_answers(
    question_id: str,
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    """Delete a question; the store cascades to its answers."""
    outcome = RequestOutcome.begin(request)
    try:
        qid = parse_positive_id(question_id)
        await call_service(
            request, service.delete_question_and_answers(qid), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome)


@router.post("/{question_id}/answers/")
async def create_answer_to_question(
    question_id: str,
    request: Request,
    service: QnaService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
):
    """Attach an answer; question and user existence is left to the store."""
    outcome = RequestOutcome.begin(request)
    try:
        body = await decode_body(
            request, CreateAnswerToQuestionRequest, settings.http_read_timeout,
        )
        qid = parse_positive_id(question_id)
        text = require_non_empty(body.text, "text")
        user_id = parse_uuid(body.user_id, "user_id")
        answer = Answer(id=0, question_id=qid, user_id=user_id, text=text)
        answer_id = await call_service(
            request, service.create_answer_to_question(answer), settings.http_write_timeout,
        )
    except QnaError as exc:
        return respond_error(outcome, exc, settings)
    return respond(outcome, data=CreateAnswerToQuestionResponse(answer_id=answer_id))
