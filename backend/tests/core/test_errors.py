"""Error Hierarchy — kinds, codes, public messages and the operation trail."""

import pytest

from qna.core.errors import (
    DatabaseError, ErrorCode, ErrorKind, FieldValidationError, InternalError,
    JsonParsingError, NotFoundError, QnaError,
)


@pytest.mark.parametrize("err, kind, code, status", [
    (JsonParsingError("x"), ErrorKind.VALIDATION, ErrorCode.JSON_PARSING_FAILED, 400),
    (FieldValidationError("x", "f"), ErrorKind.VALIDATION, ErrorCode.VALIDATION_FAILED, 400),
    (NotFoundError("user", "u"), ErrorKind.NOT_FOUND, ErrorCode.NOT_FOUND, 404),
    (DatabaseError("x", "commit"), ErrorKind.INTERNAL, ErrorCode.INTERNAL_SERVER_ERROR, 500),
    (InternalError("x"), ErrorKind.INTERNAL, ErrorCode.INTERNAL_SERVER_ERROR, 500),
])
def test_error_classification(err, kind, code, status):
    assert isinstance(err, QnaError)
    assert err.kind is kind
    assert err.code is code
    assert err.http_status == status


def test_internal_errors_hide_their_message():
    err = DatabaseError("relation does not exist", "query")

    assert err.message == "Database query failed: relation does not exist"
    assert err.public_message == "internal server error"


def test_operation_trail_reads_outermost_first():
    err = NotFoundError("question", 4)
    err.add_operation("QnaRepository.read_question_and_answers")
    err.add_operation("QnaService.get_question_and_answers")

    assert str(err) == (
        "QnaService.get_question_and_answers: "
        "QnaRepository.read_question_and_answers: question '4' not found"
    )


def test_add_operation_returns_same_error():
    err = InternalError("boom")

    assert err.add_operation("QnaService.get_users") is err
    assert err.operations == ["QnaService.get_users"]
