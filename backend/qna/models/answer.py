"""Answer ORM — a user's reply to a question.

Invariants:
    - Always belongs to one question and one user
    - Both foreign keys are ON DELETE CASCADE: the store, not the application,
      removes answers when their question or user goes away

Design Decisions:
    - No ORM relationship(): deletes are issued as bulk statements so the
      affected-row count is exact, and the database cascade does the rest
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from qna.db.base import Base


class AnswerModel(Base):
    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
