"""
Domain service: Phenological stage resolution from accumulated heat units.

The stage table is small and static, so resolution is a single linear scan
that tracks both the best qualifying stage and the lowest-threshold stage.
"""
import logging
from typing import Optional, Sequence

from app.domain.models import PhenologyStage

logger = logging.getLogger(__name__)


NO_HEAT_DESCRIPTION = "No heat accumulated"
LOOKUP_FAILED_DESCRIPTION = "Stage data unavailable"


def dormant_stage(description: str = NO_HEAT_DESCRIPTION) -> PhenologyStage:
    """Synthetic dormant stage used when the table cannot answer."""
    return PhenologyStage(
        stage_code=0,
        stage_name="Dormant",
        heat_threshold=0.0,
        description=description,
    )


def resolve_stage(heat_units: float, stages: Sequence[PhenologyStage]) -> PhenologyStage:
    """
    Find the developmental stage for the given heat units.

    Picks the stage with the largest threshold that does not exceed
    ``heat_units``. Ties on that threshold go to the first stage in table
    order. When heat units are below every threshold, the lowest-threshold
    stage is returned (again first in table order on ties).

    Args:
        heat_units: Accumulated heat units since season start
        stages: Stage table, conceptually sorted by threshold

    Returns:
        The applicable PhenologyStage, or the synthetic dormant stage
        for an empty table
    """
    best: Optional[PhenologyStage] = None
    lowest: Optional[PhenologyStage] = None

    for stage in stages:
        threshold = stage.heat_threshold
        if lowest is None or threshold < lowest.heat_threshold:
            lowest = stage
        if threshold <= heat_units and (best is None or threshold > best.heat_threshold):
            best = stage

    if best is not None:
        return best
    if lowest is not None:
        return lowest
    return dormant_stage()


class PhenologyResolver:
    """
    Resolves stages and absorbs lookup failures.

    A table of ``None`` means the collaborator could not provide one.
    Malformed entries are treated the same way. Either case yields the
    dormant stage tagged with LOOKUP_FAILED_DESCRIPTION instead of an error.
    """

    def resolve(
        self,
        heat_units: float,
        stages: Optional[Sequence[PhenologyStage]],
    ) -> PhenologyStage:
        if stages is None:
            logger.warning("Stage table unavailable, using dormant fallback stage")
            return dormant_stage(LOOKUP_FAILED_DESCRIPTION)

        try:
            stage = resolve_stage(heat_units, stages)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Stage lookup failed for heat units {heat_units}: {str(e)}")
            return dormant_stage(LOOKUP_FAILED_DESCRIPTION)

        logger.debug(f"Resolved stage BBCH {stage.stage_code} ({stage.stage_name}) "
                     f"for {heat_units} heat units")
        return stage
