"""
Domain service: Recommendation synthesis.

Builds the ordered action list shown to growers. The order of the checks
is the display priority:
1. Scab protection when leaf wetness is high
2. Spraying prohibited when the spray window is closed
3. Codling moth treatment when trap catches exceed the weekly threshold
4. Routine monitoring when nothing above fired
"""
import logging
from typing import List, Optional

from app.domain.models import (
    DiseaseRisk,
    ParameterSnapshot,
    Recommendation,
    Severity,
    WeatherWindow,
    WindowStatus,
)
from app.services.domain.thresholds import DecisionThresholds, format_number

logger = logging.getLogger(__name__)


MONITORING_RECOMMENDATION = Recommendation(
    severity=Severity.INFO,
    title="Monitoring",
    message="No action needed. Routine monitoring, all systems normal.",
)


class RecommendationSynthesizer:
    """Combines rule outputs and raw readings into recommendations."""

    def __init__(self, thresholds: Optional[DecisionThresholds] = None):
        self.thresholds = thresholds or DecisionThresholds()

    def synthesize(
        self,
        snapshot: ParameterSnapshot,
        disease_risk: DiseaseRisk,
        spray_window: WeatherWindow,
    ) -> List[Recommendation]:
        """
        Build the recommendation list.

        Entries are never merged or deduplicated. The monitoring fallback
        appears only when no other recommendation fired, so the list is
        never empty.

        Args:
            snapshot: Raw readings
            disease_risk: Output of the disease risk assessor
            spray_window: Output of the spray window evaluator

        Returns:
            Recommendations in priority order
        """
        recommendations: List[Recommendation] = []

        # Keyed on the raw reading, not the risk tier
        if snapshot.leaf_wetness_hours > self.thresholds.leaf_wetness_high_hours:
            recommendations.append(Recommendation(
                severity=Severity.CRITICAL,
                title="Scab protection",
                message=(
                    f"High leaf wetness ({format_number(snapshot.leaf_wetness_hours)} h). "
                    f"Fungicide treatment is recommended according to the Mills table "
                    f"at {format_number(snapshot.air_temperature)}°C."
                ),
            ))

        if spray_window.status == WindowStatus.CLOSED:
            recommendations.append(Recommendation(
                severity=Severity.WARNING,
                title="Spraying prohibited",
                message=spray_window.reason,
            ))

        if snapshot.pest_trap_count > self.thresholds.pest_trap_weekly_threshold:
            recommendations.append(Recommendation(
                severity=Severity.CRITICAL,
                title="Codling moth treatment",
                message=(
                    f"Threshold exceeded ({snapshot.pest_trap_count} per week, "
                    f"threshold {self.thresholds.pest_trap_weekly_threshold} per week). "
                    f"Insecticide treatment is recommended."
                ),
            ))

        if not recommendations:
            recommendations.append(MONITORING_RECOMMENDATION)

        logger.debug(f"Synthesized {len(recommendations)} recommendations "
                     f"(disease risk: {disease_risk.level.value})")
        return recommendations


def synthesize_recommendations(
    snapshot: ParameterSnapshot,
    disease_risk: DiseaseRisk,
    spray_window: WeatherWindow,
) -> List[Recommendation]:
    """Synthesize recommendations with the default thresholds."""
    return RecommendationSynthesizer().synthesize(snapshot, disease_risk, spray_window)
