"""Response Envelope — the uniform {status, error?, data?} JSON wrapper.

Invariants:
    - status is always the reason phrase of the HTTP status code ("OK", "Bad Request", ...)
    - error and data are never both present
    - data is omitted only when it is None; an empty list is still sent as []
    - Content-Type is application/json
"""

from http import HTTPStatus
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from qna.core.errors import ErrorCode


def build_envelope(
    status_code: int,
    data: Any = None,
    error: tuple[ErrorCode, str] | None = None,
) -> dict:
    """Build the envelope dict for a status code and at most one of data/error."""
    if data is not None and error is not None:
        raise ValueError("envelope carries either data or error, not both")
    body: dict[str, Any] = {"status": HTTPStatus(status_code).phrase}
    if error is not None:
        code, desc = error
        body["error"] = {"code": ErrorCode(code).value, "desc": desc}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    return body


def envelope_response(
    status_code: int,
    data: Any = None,
    error: tuple[ErrorCode, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(status_code, data=data, error=error),
    )
