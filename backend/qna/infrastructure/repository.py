"""QnA Repository — SQLAlchemy implementation of the persistence gateway.

Invariants:
    - One session (one transaction) per operation
    - Deletes are bulk statements; rowcount == 0 raises NotFoundError
    - Read-by-id raises NotFoundError when no row matches
    - Answer cascades are left to the foreign keys (models/answer.py)
    - Every error leaving this module carries "QnaRepository.<method>" in its operations

Design Decisions:
    - ORM rows converted to frozen core.entities before leaving the session:
      callers never see SQLAlchemy objects
"""

import uuid
from contextlib import contextmanager

from sqlalchemy import delete, select

from qna.core.entities import Answer, Question, User
from qna.core.errors import NotFoundError, QnaError
from qna.core.repositories import QuestionRepository, UserRepository
from qna.infrastructure.database import DatabaseSessionManager
from qna.models.answer import AnswerModel
from qna.models.question import QuestionModel
from qna.models.user import UserModel


@contextmanager
def _operation(name: str):
    try:
        yield
    except QnaError as e:
        e.add_operation(f"QnaRepository.{name}")
        raise


class QnaRepository(UserRepository, QuestionRepository):
    """Users, questions and answers stored through one session manager."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    # ─── Users ──────────────────────────────────────────────────

    async def create_user(self, name: str) -> str:
        with _operation("create_user"):
            async with self._db.session() as db:
                user = UserModel(name=name)
                db.add(user)
                await db.commit()
                return str(user.id)

    async def read_users(self) -> list[User]:
        with _operation("read_users"):
            async with self._db.session() as db:
                result = await db.execute(
                    select(UserModel).order_by(UserModel.created_at, UserModel.id),
                )
                return [_to_user(u) for u in result.scalars().all()]

    async def delete_user(self, user_id: str) -> None:
        with _operation("delete_user"):
            async with self._db.session() as db:
                result = await db.execute(
                    delete(UserModel).where(UserModel.id == uuid.UUID(user_id)),
                )
                await db.commit()
            if result.rowcount == 0:
                raise NotFoundError("user", user_id)

    # ─── Questions ──────────────────────────────────────────────

    async def read_questions(self) -> list[Question]:
        with _operation("read_questions"):
            async with self._db.session() as db:
                result = await db.execute(
                    select(QuestionModel).order_by(QuestionModel.id),
                )
                return [_to_question(q) for q in result.scalars().all()]

    async def create_question(self, text: str) -> int:
        with _operation("create_question"):
            async with self._db.session() as db:
                question = QuestionModel(text=text)
                db.add(question)
                await db.commit()
                return question.id

    async def read_question_and_answers(
        self, question_id: int,
    ) -> tuple[Question, list[Answer]]:
        with _operation("read_question_and_answers"):
            async with self._db.session() as db:
                question = await db.get(QuestionModel, question_id)
                if question is None:
                    raise NotFoundError("question", question_id)
                result = await db.execute(
                    select(AnswerModel)
                    .where(AnswerModel.question_id == question_id)
                    .order_by(AnswerModel.id),
                )
                answers = [_to_answer(a) for a in result.scalars().all()]
            return _to_question(question), answers

    async def delete_question_and_answers(self, question_id: int) -> None:
        with _operation("delete_question_and_answers"):
            async with self._db.session() as db:
                result = await db.execute(
                    delete(QuestionModel).where(QuestionModel.id == question_id),
                )
                await db.commit()
            if result.rowcount == 0:
                raise NotFoundError("question", question_id)

    # ─── Answers ────────────────────────────────────────────────

    async def create_answer_to_question(self, answer: Answer) -> int:
        with _operation("create_answer_to_question"):
            async with self._db.session() as db:
                row = AnswerModel(
                    question_id=answer.question_id,
                    user_id=uuid.UUID(answer.user_id),
                    text=answer.text,
                )
                db.add(row)
                await db.commit()
                return row.id

    async def read_answer(self, answer_id: int) -> Answer:
        with _operation("read_answer"):
            async with self._db.session() as db:
                row = await db.get(AnswerModel, answer_id)
            if row is None:
                raise NotFoundError("answer", answer_id)
            return _to_answer(row)

    async def delete_answer(self, answer_id: int) -> None:
        with _operation("delete_answer"):
            async with self._db.session() as db:
                result = await db.execute(
                    delete(AnswerModel).where(AnswerModel.id == answer_id),
                )
                await db.commit()
            if result.rowcount == 0:
                raise NotFoundError("answer", answer_id)


def _to_user(row: UserModel) -> User:
    return User(id=str(row.id), name=row.name)


def _to_question(row: QuestionModel) -> Question:
    return Question(id=row.id, text=row.text)


def _to_answer(row: AnswerModel) -> Answer:
    return Answer(
        id=row.id,
        question_id=row.question_id,
        user_id=str(row.user_id),
        text=row.text,
    )
