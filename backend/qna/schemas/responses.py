"""Response Schemas — payloads placed under the envelope's "data" key.

Invariants:
    - Built from core.entities via from_attributes (no ORM objects reach this layer)
    - answers is always a list, possibly empty
"""

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str


class AnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    user_id: str
    text: str


class CreateUserResponse(BaseModel):
    user_id: str


class CreateQuestionResponse(BaseModel):
    question_id: int


class CreateAnswerToQuestionResponse(BaseModel):
    answer_id: int


class QuestionAndAnswersResponse(BaseModel):
    question: QuestionOut
    answers: list[AnswerOut]
