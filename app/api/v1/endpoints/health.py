"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.infrastructure.firebase import get_firestore_client
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Document store not configured", "model": ReadinessResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Report which backing services are configured; 503 without Firestore.

    Auth, push and suggestions are optional: without them the service runs
    degraded (those endpoints answer 503, search returns no suggestions).
    """
    state = request.app.state
    body = ReadinessResponse(
        firestore=get_firestore_client() is not None,
        auth=getattr(state, "auth_provider", None) is not None,
        push=getattr(state, "push_sender", None) is not None,
        suggestions=getattr(state, "suggestion_service", None) is not None,
    )
    if not body.firestore:
        body.status = "not_ready"
        return JSONResponse(status_code=503, content=body.model_dump())
    if not (body.auth and body.push and body.suggestions):
        body.status = "degraded"
    return body
