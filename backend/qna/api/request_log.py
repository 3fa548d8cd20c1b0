"""Request Log — explicit per-request outcome record and its log lines.

Invariants:
    - begin() logs the start line; finish() logs exactly one completion line
    - Completion is ERROR level when any error was recorded, INFO otherwise
    - The record is owned by the handler and passed to finish() directly;
      nothing is stashed on the request for a middleware to pick up

Design Decisions:
    - Errors kept as exceptions until logging: str() carries the operation trail
"""

import logging
import time
from dataclasses import dataclass, field

from fastapi import Request

logger = logging.getLogger(__name__)


@dataclass
class RequestOutcome:
    """What happened to one request: status and accumulated errors."""

    method: str
    path: str
    remote_addr: str
    started: float = field(default_factory=time.perf_counter)
    status: int = 200
    errors: list[BaseException] = field(default_factory=list)
    finished: bool = False

    @classmethod
    def begin(cls, request: Request) -> "RequestOutcome":
        client = request.client
        remote_addr = f"{client.host}:{client.port}" if client else "-"
        outcome = cls(
            method=request.method, path=request.url.path, remote_addr=remote_addr,
        )
        logger.info(
            f"[START] {outcome.method} {outcome.path} | IP: {remote_addr}",
            extra={
                "method": outcome.method,
                "path": outcome.path,
                "remote_addr": remote_addr,
            },
        )
        return outcome

    @property
    def duration_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 3)

    def record_error(self, error: BaseException) -> None:
        self.errors.append(error)

    def finish(self, status: int) -> None:
        """Log the completion line; later calls are ignored."""
        if self.finished:
            return
        self.finished = True
        self.status = status
        extra = {
            "method": self.method,
            "path": self.path,
            "remote_addr": self.remote_addr,
            "status": status,
            "duration_ms": self.duration_ms,
        }
        if self.errors:
            errors = [str(e) for e in self.errors]
            logger.error(
                f"[ERROR] {self.method} {self.path} | Status: {status} | "
                f"Duration: {self.duration_ms}ms | ErrorList {errors}",
                extra={**extra, "errors": errors},
            )
        else:
            logger.info(
                f"[ END ] {self.method} {self.path} | Status: {status} | "
                f"Duration: {self.duration_ms}ms",
                extra=extra,
            )
