"""Domain Entities — plain records for questions, answers and users.

Invariants:
    - No behaviour, no IO: entities are produced by the repository and read by handlers
    - User ids are UUID strings; question and answer ids are positive integers
    - Entities are immutable (no update operations exist)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Question:
    id: int
    text: str


@dataclass(frozen=True)
class Answer:
    id: int
    question_id: int
    user_id: str
    text: str


@dataclass(frozen=True)
class User:
    id: str
    name: str
