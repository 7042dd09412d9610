"""
API router for phenology stage endpoints.
"""
from typing import Annotated
from fastapi import APIRouter, Query

from app.api.dependencies import OrchardServiceDep
from app.api.v1.models.responses import StageTableResponse
from app.domain.models import PhenologyStage


router = APIRouter(
    prefix="/phenology",
    tags=["phenology"],
)


@router.get(
    "/stages",
    response_model=StageTableResponse,
    summary="List phenology stages",
    responses={
        503: {
            "description": "Stage table source unavailable",
        },
    }
)
async def list_stages(orchard_service: OrchardServiceDep) -> StageTableResponse:
    """
    Return the stage table sorted by heat threshold.

    StageTableError is left to the error handling middleware (503).
    """
    stages = await orchard_service.list_stages()
    return StageTableResponse(count=len(stages), stages=stages)


@router.get(
    "/stages/resolve",
    response_model=PhenologyStage,
    summary="Resolve phenology stage",
    description="""
    Resolve the BBCH stage for accumulated heat units. Falls back to the
    lowest stage below every threshold, and to a synthetic dormant stage
    when the table is empty or unavailable.
    """,
)
async def resolve_stage(
    heat_units: Annotated[float, Query(ge=0, description="Accumulated heat units (base 5°C)")],
    orchard_service: OrchardServiceDep,
) -> PhenologyStage:
    return await orchard_service.resolve_stage(heat_units)
