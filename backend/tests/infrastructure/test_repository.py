"""QnaRepository — SQLAlchemy persistence against a SQLite store.

Tests:
    - Ids: UUID strings for users, autoincrement integers for questions and answers
    - Reads and deletes of missing rows raise NotFoundError with the operation trail
    - Foreign keys reject dangling answers and cascade on delete
"""

import uuid

import pytest

from qna.core.entities import Answer, Question, User
from qna.core.errors import DatabaseError, NotFoundError


@pytest.mark.asyncio
async def test_create_and_read_users(repository):
    alice = await repository.create_user("alice")
    bob = await repository.create_user("bob")

    assert str(uuid.UUID(alice)) == alice
    assert await repository.read_users() == [
        User(id=alice, name="alice"), User(id=bob, name="bob"),
    ]


@pytest.mark.asyncio
async def test_delete_user(repository):
    user_id = await repository.create_user("alice")

    await repository.delete_user(user_id)

    assert await repository.read_users() == []


@pytest.mark.asyncio
async def test_delete_missing_user(repository):
    with pytest.raises(NotFoundError) as exc_info:
        await repository.delete_user(str(uuid.uuid4()))

    assert exc_info.value.operations == ["QnaRepository.delete_user"]


@pytest.mark.asyncio
async def test_questions_get_sequential_ids(repository):
    assert await repository.create_question("first") == 1
    assert await repository.create_question("second") == 2

    assert await repository.read_questions() == [
        Question(id=1, text="first"), Question(id=2, text="second"),
    ]


@pytest.mark.asyncio
async def test_question_with_answers(repository):
    user_id = await repository.create_user("alice")
    qid = await repository.create_question("what?")
    first = await repository.create_answer_to_question(
        Answer(id=0, question_id=qid, user_id=user_id, text="a"),
    )
    second = await repository.create_answer_to_question(
        Answer(id=0, question_id=qid, user_id=user_id, text="b"),
    )

    question, answers = await repository.read_question_and_answers(qid)

    assert question == Question(id=qid, text="what?")
    assert answers == [
        Answer(id=first, question_id=qid, user_id=user_id, text="a"),
        Answer(id=second, question_id=qid, user_id=user_id, text="b"),
    ]
    assert await repository.read_answer(second) == answers[1]


@pytest.mark.asyncio
async def test_question_without_answers(repository):
    qid = await repository.create_question("lonely")

    _, answers = await repository.read_question_and_answers(qid)

    assert answers == []


@pytest.mark.parametrize("method", [
    "read_question_and_answers", "delete_question_and_answers",
    "read_answer", "delete_answer",
])
@pytest.mark.asyncio
async def test_missing_ids_raise_not_found(repository, method):
    with pytest.raises(NotFoundError) as exc_info:
        await getattr(repository, method)(42)

    assert exc_info.value.operations == [f"QnaRepository.{method}"]


@pytest.mark.asyncio
async def test_answer_to_missing_question_rejected(repository):
    user_id = await repository.create_user("alice")

    with pytest.raises(DatabaseError) as exc_info:
        await repository.create_answer_to_question(
            Answer(id=0, question_id=99, user_id=user_id, text="a"),
        )

    assert exc_info.value.operations == ["QnaRepository.create_answer_to_question"]


@pytest.mark.asyncio
async def test_delete_question_cascades(repository):
    user_id = await repository.create_user("alice")
    qid = await repository.create_question("q")
    aid = await repository.create_answer_to_question(
        Answer(id=0, question_id=qid, user_id=user_id, text="a"),
    )

    await repository.delete_question_and_answers(qid)

    with pytest.raises(NotFoundError):
        await repository.read_answer(aid)


@pytest.mark.asyncio
async def test_delete_user_cascades(repository):
    alice = await repository.create_user("alice")
    bob = await repository.create_user("bob")
    qid = await repository.create_question("q")
    for user_id in (alice, bob):
        await repository.create_answer_to_question(
            Answer(id=0, question_id=qid, user_id=user_id, text=user_id),
        )

    await repository.delete_user(alice)

    _, answers = await repository.read_question_and_answers(qid)
    assert [a.user_id for a in answers] == [bob]
