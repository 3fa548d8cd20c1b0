"""Request Schemas — JSON bodies accepted by the write endpoints.

Invariants:
    - Strict typing: a number where a string is expected is a decode failure
    - Missing or null fields decode to "" so emptiness is reported as a validation failure
    - Unknown fields are ignored
"""

from pydantic import BaseModel, ConfigDict, field_validator


class _RequestBody(BaseModel):
    model_config = ConfigDict(strict=True)

    @field_validator("*", mode="before", check_fields=False)
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v


class CreateUserRequest(_RequestBody):
    name: str = ""


class CreateQuestionRequest(_RequestBody):
    text: str = ""


class CreateAnswerToQuestionRequest(_RequestBody):
    user_id: str = ""
    text: str = ""
