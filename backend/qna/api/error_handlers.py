"""Error Handlers — global exception handlers that keep every response in the envelope.

Invariants:
    - Unmatched routes (404) and wrong methods (405) answer with an envelope, not {"detail": ...}
    - QnaError escaping a route is mapped exactly like respond_error does
    - Exception (catch-all) → INTERNAL_SERVER_ERROR, never leaks internal details
    - Each handler closes its own RequestOutcome so the request is still logged

Design Decisions:
    - Four-layer handler: routing (HTTPException), request validation, domain (QnaError), catch-all
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from qna.api.envelope import envelope_response
from qna.api.request_log import RequestOutcome
from qna.api.routes.handler_helpers import map_error
from qna.core.errors import ErrorCode, QnaError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_qna_error_handler(app)
    _register_generic_error_handler(app)


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        outcome = RequestOutcome.begin(request)
        outcome.record_error(exc)
        outcome.finish(exc.status_code)
        if exc.status_code >= 500:
            code = ErrorCode.INTERNAL_SERVER_ERROR
        else:
            code = _HTTP_ERROR_CODES.get(exc.status_code, ErrorCode.VALIDATION_FAILED)
        response = envelope_response(exc.status_code, error=(code, str(exc.detail)))
        if exc.headers:
            response.headers.update(exc.headers)
        return response


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        outcome = RequestOutcome.begin(request)
        outcome.record_error(exc)
        outcome.finish(status.HTTP_400_BAD_REQUEST)
        return envelope_response(
            status.HTTP_400_BAD_REQUEST,
            error=(ErrorCode.VALIDATION_FAILED, "Invalid request data"),
        )


def _register_qna_error_handler(app: FastAPI) -> None:

    @app.exception_handler(QnaError)
    async def qna_error_handler(request: Request, exc: QnaError):
        outcome = RequestOutcome.begin(request)
        outcome.record_error(exc)
        status_code, code, desc = map_error(exc, request.app.state.settings.not_found_as_404)
        outcome.finish(status_code)
        return envelope_response(status_code, error=(code, desc))


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        outcome = RequestOutcome.begin(request)
        outcome.record_error(exc)
        outcome.finish(status.HTTP_500_INTERNAL_SERVER_ERROR)
        return envelope_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error=(ErrorCode.INTERNAL_SERVER_ERROR, "internal server error"),
        )
