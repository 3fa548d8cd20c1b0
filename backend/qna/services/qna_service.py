"""QnA Service — use-case layer between HTTP handlers and the repositories.

Invariants:
    - One method per client-visible operation, one repository call per method
    - Errors keep their class and ErrorKind; only the operation name is added
    - Anything that is not a QnaError becomes an InternalError chained from the original
    - No business rules beyond delegation: validation happens in the handler layer

Design Decisions:
    - Repositories injected as interfaces (core/repositories.py): the same
      SQLAlchemy QnaRepository instance usually serves both roles
"""

import logging
from contextlib import contextmanager

from qna.core.entities import Answer, Question, User
from qna.core.errors import InternalError, QnaError
from qna.core.repositories import QuestionRepository, UserRepository

logger = logging.getLogger(__name__)


@contextmanager
def _operation(name: str):
    op = f"QnaService.{name}"
    try:
        yield
    except QnaError as e:
        e.add_operation(op)
        raise
    except Exception as e:
        logger.error(f"Unexpected error in {op}: {e!r}", extra={"operation": op})
        raise InternalError(f"{op}: {e!r}") from e


class QnaService:
    """CRUD orchestration for users, questions and answers."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        user_repository: UserRepository,
    ):
        self.questions = question_repository
        self.users = user_repository

    async def create_user(self, name: str) -> str:
        with _operation("create_user"):
            return await self.users.create_user(name)

    async def get_users(self) -> list[User]:
        with _operation("get_users"):
            return await self.users.read_users()

    async def delete_user(self, user_id: str) -> None:
        with _operation("delete_user"):
            await self.users.delete_user(user_id)

    async def get_questions(self) -> list[Question]:
        with _operation("get_questions"):
            return await self.questions.read_questions()

    async def create_question(self, text: str) -> int:
        with _operation("create_question"):
            return await self.questions.create_question(text)

    async def get_question_and_answers(
        self, question_id: int,
    ) -> tuple[Question, list[Answer]]:
        with _operation("get_question_and_answers"):
            return await self.questions.read_question_and_answers(question_id)

    async def delete_question_and_answers(self, question_id: int) -> None:
        with _operation("delete_question_and_answers"):
            await self.questions.delete_question_and_answers(question_id)

    async def create_answer_to_question(self, answer: Answer) -> int:
        with _operation("create_answer_to_question"):
            return await self.questions.create_answer_to_question(answer)

    async def get_answer(self, answer_id: int) -> Answer:
        with _operation("get_answer"):
            return await self.questions.read_answer(answer_id)

    async def delete_answer(self, answer_id: int) -> None:
        with _operation("delete_answer"):
            await self.questions.delete_answer(answer_id)
