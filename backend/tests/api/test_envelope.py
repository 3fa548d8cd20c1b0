"""Response Envelope — status phrase, data/error exclusivity, encoding."""

import pytest

from qna.api.envelope import build_envelope, envelope_response
from qna.core.errors import ErrorCode
from qna.schemas.responses import CreateQuestionResponse


def test_status_only_when_nothing_to_send():
    assert build_envelope(200) == {"status": "OK"}


@pytest.mark.parametrize("status_code, phrase", [
    (200, "OK"),
    (400, "Bad Request"),
    (404, "Not Found"),
    (500, "Internal Server Error"),
    (503, "Service Unavailable"),
])
def test_status_is_reason_phrase(status_code, phrase):
    assert build_envelope(status_code)["status"] == phrase


def test_empty_list_is_kept():
    assert build_envelope(200, data=[]) == {"status": "OK", "data": []}


def test_models_are_encoded():
    body = build_envelope(200, data=CreateQuestionResponse(question_id=3))

    assert body == {"status": "OK", "data": {"question_id": 3}}


def test_error_shape():
    body = build_envelope(400, error=(ErrorCode.VALIDATION_FAILED, "bad"))

    assert body == {
        "status": "Bad Request",
        "error": {"code": "VALIDATION_FAILED", "desc": "bad"},
    }
    assert "data" not in body


def test_data_and_error_together_rejected():
    with pytest.raises(ValueError):
        build_envelope(200, data={"x": 1}, error=(ErrorCode.NOT_FOUND, "gone"))


def test_response_is_json():
    res = envelope_response(200, data={"x": 1})

    assert res.status_code == 200
    assert res.headers["content-type"] == "application/json"
    assert res.body == b'{"status":"OK","data":{"x":1}}'
