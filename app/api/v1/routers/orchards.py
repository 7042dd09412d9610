"""
API router for orchard endpoints.
"""
from fastapi import APIRouter, Request

from app.api.dependencies import OrchardServiceDep
from app.api.rate_limit import RATE_LIMIT, limiter
from app.api.v1.models.requests import EvaluationRequest
from app.api.v1.models.responses import OrchardStateResponse


router = APIRouter(
    prefix="/orchards",
    tags=["orchards"],
)


@router.post(
    "/evaluate",
    response_model=OrchardStateResponse,
    summary="Evaluate orchard state",
    description="""
    Evaluate the orchard state from a snapshot of environmental readings.

    This endpoint:
    1. Resolves the phenological (BBCH) stage from accumulated heat units
    2. Classifies scab infection risk from leaf wetness
    3. Decides whether the spray window is open from temperature and wind
    4. Builds a prioritized list of recommendations

    If the stage table cannot be loaded, the dormant fallback stage is
    returned and the remaining results are still computed.
    """,
    responses={
        200: {
            "description": "Successfully evaluated orchard state",
        },
        422: {
            "description": "Invalid readings (e.g. negative durations)",
        },
        429: {
            "description": "Rate limit exceeded",
        },
    }
)
@limiter.limit(RATE_LIMIT)
async def evaluate_orchard(
    request: Request,
    payload: EvaluationRequest,
    orchard_service: OrchardServiceDep,
) -> OrchardStateResponse:
    """
    Evaluate the orchard state.

    Args:
        request: Incoming request (used by the rate limiter)
        payload: Environmental readings
        orchard_service: Orchard service (injected dependency)

    Returns:
        OrchardStateResponse
    """
    # Delegate to service layer (no business logic here)
    state = await orchard_service.evaluate(payload.to_snapshot())
    return OrchardStateResponse.from_state(state)
