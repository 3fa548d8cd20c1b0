"""QnaService — delegation to repositories and error wrapping.

Tests:
    - Every operation calls exactly one repository method with its arguments
    - QnaErrors keep their class and gain "QnaService.<op>" in the trail
    - Any other exception becomes InternalError chained from the original
"""

from unittest.mock import AsyncMock

import pytest

from qna.core.entities import Answer, Question, User
from qna.core.errors import DatabaseError, ErrorKind, InternalError, NotFoundError
from qna.core.repositories import QuestionRepository, UserRepository
from qna.services.qna_service import QnaService

USER_ID = "f47ac10b-58cc-4372-a567-0e02b2c3de91"


@pytest.fixture
def question_repo():
    return AsyncMock(spec=QuestionRepository)


@pytest.fixture
def user_repo():
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def service(question_repo, user_repo):
    return QnaService(question_repo, user_repo)


@pytest.mark.asyncio
async def test_user_operations_delegate(service, user_repo):
    user_repo.create_user.return_value = USER_ID
    user_repo.read_users.return_value = [User(id=USER_ID, name="alice")]

    assert await service.create_user("alice") == USER_ID
    assert await service.get_users() == [User(id=USER_ID, name="alice")]
    await service.delete_user(USER_ID)

    user_repo.create_user.assert_awaited_once_with("alice")
    user_repo.delete_user.assert_awaited_once_with(USER_ID)


@pytest.mark.asyncio
async def test_question_operations_delegate(service, question_repo):
    question = Question(id=1, text="what?")
    answer = Answer(id=1, question_id=1, user_id=USER_ID, text="42")
    question_repo.read_questions.return_value = [question]
    question_repo.create_question.return_value = 1
    question_repo.read_question_and_answers.return_value = (question, [answer])
    question_repo.create_answer_to_question.return_value = 1
    question_repo.read_answer.return_value = answer

    assert await service.get_questions() == [question]
    assert await service.create_question("what?") == 1
    assert await service.get_question_and_answers(1) == (question, [answer])
    assert await service.create_answer_to_question(answer) == 1
    assert await service.get_answer(1) == answer
    await service.delete_answer(1)
    await service.delete_question_and_answers(1)

    question_repo.create_answer_to_question.assert_awaited_once_with(answer)
    question_repo.delete_answer.assert_awaited_once_with(1)
    question_repo.delete_question_and_answers.assert_awaited_once_with(1)


@pytest.mark.asyncio
async def test_not_found_keeps_kind_and_gains_operation(service, question_repo):
    question_repo.read_answer.side_effect = NotFoundError("answer", 9)

    with pytest.raises(NotFoundError) as exc_info:
        await service.get_answer(9)

    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert str(exc_info.value) == "QnaService.get_answer: answer '9' not found"


@pytest.mark.asyncio
async def test_database_error_passes_through(service, user_repo):
    user_repo.read_users.side_effect = DatabaseError("timeout", "execute")

    with pytest.raises(DatabaseError) as exc_info:
        await service.get_users()

    assert exc_info.value.operations == ["QnaService.get_users"]


@pytest.mark.asyncio
async def test_unexpected_error_becomes_internal(service, question_repo):
    cause = ValueError("bad row")
    question_repo.create_question.side_effect = cause

    with pytest.raises(InternalError) as exc_info:
        await service.create_question("q")

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.public_message == "internal server error"
    assert "QnaService.create_question" in exc_info.value.message
