"""Error Hierarchy — typed, kind-tagged exceptions for every QnA failure mode.

Invariants:
    - Every error has a code (str), kind (ErrorKind) and http_status
    - VALIDATION errors are client-facing (400); INTERNAL errors never leak details
    - NOT_FOUND is a distinct kind so the HTTP layer decides how to surface it
    - operations records each layer the error crossed (repository → service)

Design Decisions:
    - Single hierarchy with QnaError base: handlers catch one type (ADR: uniform error shape)
    - add_operation mutates and returns self: re-raise keeps the original class and kind
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure kinds the HTTP layer maps to status codes."""
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTERNAL = "internal"


class ErrorCode(str, Enum):
    """Error codes carried in the response envelope."""
    VALIDATION_FAILED = "VALIDATION_FAILED"
    JSON_PARSING_FAILED = "JSON_PARSING_FAILED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"


class QnaError(Exception):
    """Base exception for all QnA errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        kind: ErrorKind,
        http_status: int = 500,
        public_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.http_status = http_status
        self.public_message = public_message or message
        self.operations: list[str] = []

    def add_operation(self, operation: str) -> "QnaError":
        """Record the operation this error passed through (innermost first)."""
        self.operations.append(operation)
        return self

    def __str__(self) -> str:
        # Outermost operation first, like a wrapped error chain.
        return ": ".join([*reversed(self.operations), self.message])


# ─── Client Errors (400-level) ──────────────────────────────────

class JsonParsingError(QnaError):
    """Request body could not be decoded into the expected shape."""
    def __init__(self, message: str):
        super().__init__(
            message, ErrorCode.JSON_PARSING_FAILED, ErrorKind.VALIDATION,
            400, "Invalid request body",
        )


class FieldValidationError(QnaError):
    """A decoded field or path parameter failed validation."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, ErrorCode.VALIDATION_FAILED, ErrorKind.VALIDATION, 400,
        )
        self.field = field


class NotFoundError(QnaError):
    """No row matched, or a mutation affected zero rows."""
    def __init__(self, resource: str, identifier: object):
        super().__init__(
            f"{resource} '{identifier}' not found",
            ErrorCode.NOT_FOUND, ErrorKind.NOT_FOUND, 404,
        )
        self.resource = resource
        self.identifier = identifier


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(QnaError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorCode.INTERNAL_SERVER_ERROR, ErrorKind.INTERNAL, 500,
            "internal server error",
        )
        self.operation = operation


class InternalError(QnaError):
    """Unexpected failure, timeout or cancellation."""
    def __init__(self, message: str):
        super().__init__(
            message, ErrorCode.INTERNAL_SERVER_ERROR, ErrorKind.INTERNAL, 500,
            "internal server error",
        )
