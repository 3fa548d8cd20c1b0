"""ORM Models — SQLAlchemy declarative models for users, questions and answers.

Invariants:
    - All models inherit from Base (db/base.py)
    - Answers reference questions and users with ON DELETE CASCADE

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from qna.models.user import UserModel  # noqa: F401
from qna.models.question import QuestionModel  # noqa: F401
from qna.models.answer import AnswerModel  # noqa: F401
