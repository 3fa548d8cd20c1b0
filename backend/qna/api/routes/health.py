"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - Both answer with the standard envelope and log like every other request

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

from fastapi import APIRouter, Request, status

from qna import __version__
from qna.api.envelope import envelope_response
from qna.api.request_log import RequestOutcome
from qna.core.errors import ErrorCode

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    outcome = RequestOutcome.begin(request)
    outcome.finish(status.HTTP_200_OK)
    return envelope_response(
        status.HTTP_200_OK, data={"service": "qna-api", "version": __version__},
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity."""
    outcome = RequestOutcome.begin(request)
    db = getattr(request.app.state, "db", None)
    db_ok = await db.health_check() if db else False
    if not db_ok:
        outcome.record_error(RuntimeError("database unavailable"))
        outcome.finish(status.HTTP_503_SERVICE_UNAVAILABLE)
        return envelope_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            error=(ErrorCode.INTERNAL_SERVER_ERROR, "database unavailable"),
        )
    outcome.finish(status.HTTP_200_OK)
    return envelope_response(status.HTTP_200_OK, data={"database": "healthy"})
