"""Repository Interfaces — the persistence gateway the service layer depends on.

Invariants:
    - Mutations raise NotFoundError when zero rows are affected
    - Read-by-id raises NotFoundError when no row matches
    - Cascading deletes are the store's responsibility, not the caller's
"""

from abc import ABC, abstractmethod

from qna.core.entities import Answer, Question, User


class UserRepository(ABC):
    """Persistence operations for users."""

    @abstractmethod
    async def create_user(self, name: str) -> str:
        """Insert a user and return its generated id."""

    @abstractmethod
    async def read_users(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        """Delete a user (and, via the store, their answers)."""


class QuestionRepository(ABC):
    """Persistence operations for questions and their answers."""

    @abstractmethod
    async def read_questions(self) -> list[Question]:
        """Return every question."""

    @abstractmethod
    async def create_question(self, text: str) -> int:
        """Insert a question and return its generated id."""

    @abstractmethod
    async def read_question_and_answers(
        self, question_id: int,
    ) -> tuple[Question, list[Answer]]:
        """Return a question together with all answers attached to it."""

    @abstractmethod
    async def delete_question_and_answers(self, question_id: int) -> None:
        """Delete a question; its answers go with it."""

    @abstractmethod
    async def create_answer_to_question(self, answer: Answer) -> int:
        """Insert an answer (its id field is ignored) and return the new id."""

    @abstractmethod
    async def read_answer(self, answer_id: int) -> Answer:
        """Return a single answer."""

    @abstractmethod
    async def delete_answer(self, answer_id: int) -> None:
        """Delete a single answer."""
