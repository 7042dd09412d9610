"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from app.infrastructure.stage_repository import (
    StageRepository,
    get_stage_repository,
)
from app.services.domain.orchard_state_evaluator import OrchardStateEvaluator
from app.services.domain.thresholds import DecisionThresholds
from app.services.application.orchard_service import OrchardService


def get_orchard_state_evaluator() -> OrchardStateEvaluator:
    """
    Dependency factory for OrchardStateEvaluator.

    Returns:
        OrchardStateEvaluator configured from settings
    """
    return OrchardStateEvaluator(thresholds=DecisionThresholds.from_settings())


def get_orchard_service(
    stage_repository: Annotated[StageRepository, Depends(get_stage_repository)],
    evaluator: Annotated[OrchardStateEvaluator, Depends(get_orchard_state_evaluator)],
) -> OrchardService:
    """
    Dependency factory for OrchardService.

    Args:
        stage_repository: Stage table source (injected)
        evaluator: Orchard state evaluator (injected)

    Returns:
        OrchardService instance
    """
    return OrchardService(stage_repository=stage_repository, evaluator=evaluator)


# Type aliases for cleaner route signatures
OrchardServiceDep = Annotated[OrchardService, Depends(get_orchard_service)]
