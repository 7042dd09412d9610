"""
Application service: Orchestration layer for orchard evaluations.
"""
import logging
from typing import List, Optional

from app.domain.models import OrchardState, ParameterSnapshot, PhenologyStage
from app.infrastructure.stage_repository import StageRepository
from app.infrastructure.stage_table_client import StageTableError
from app.services.domain.orchard_state_evaluator import OrchardStateEvaluator

logger = logging.getLogger(__name__)


class OrchardService:
    """
    Application service for orchard-related operations.

    Orchestrates stage table fetching and rule evaluation.
    Follows the application layer pattern - no business logic here,
    only coordination between infrastructure and domain layers.
    """

    def __init__(
        self,
        stage_repository: StageRepository,
        evaluator: OrchardStateEvaluator,
    ):
        """
        Initialize the service with dependencies.

        Args:
            stage_repository: Source of the phenology stage table
            evaluator: Orchard state evaluator
        """
        self.stage_repository = stage_repository
        self.evaluator = evaluator

    async def _fetch_stages(self) -> Optional[List[PhenologyStage]]:
        """Fetch the stage table, returning None when the source fails."""
        try:
            return await self.stage_repository.get_stages()
        except StageTableError as e:
            logger.warning(f"Stage table unavailable, evaluating with fallback stage: {str(e)}")
            return None

    async def evaluate(self, snapshot: ParameterSnapshot) -> OrchardState:
        """
        Evaluate the orchard state for a snapshot.

        A stage table failure never fails the evaluation; the result
        carries the dormant fallback stage instead.

        Args:
            snapshot: Environmental readings

        Returns:
            OrchardState
        """
        stages = await self._fetch_stages()
        return self.evaluator.evaluate(snapshot, stages)

    async def resolve_stage(self, heat_units: float) -> PhenologyStage:
        """
        Resolve the phenological stage only.

        Args:
            heat_units: Accumulated heat units

        Returns:
            Resolved PhenologyStage (fallback stage on lookup failure)
        """
        stages = await self._fetch_stages()
        return self.evaluator.phenology_resolver.resolve(heat_units, stages)

    async def list_stages(self) -> List[PhenologyStage]:
        """
        Return the current stage table sorted by threshold.

        Raises:
            StageTableError: If the source cannot provide the table
        """
        stages = await self.stage_repository.get_stages()
        return sorted(stages, key=lambda s: s.heat_threshold)
