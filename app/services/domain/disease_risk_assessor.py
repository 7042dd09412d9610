"""
Domain service: Fungal disease risk from leaf wetness duration.
"""
from typing import Optional

from app.domain.models import DiseaseRisk, RiskLevel
from app.services.domain.thresholds import DecisionThresholds, format_number


class DiseaseRiskAssessor:
    """
    Classifies scab infection risk into three tiers.

    Both boundaries are exclusive: exactly 5 hours is Low and exactly
    10 hours is Moderate with the default thresholds. Temperature is
    accepted for context only and does not move the boundaries.
    """

    def __init__(self, thresholds: Optional[DecisionThresholds] = None):
        self.thresholds = thresholds or DecisionThresholds()

    def assess(self, leaf_wetness_hours: float, air_temperature: float) -> DiseaseRisk:
        hours = format_number(leaf_wetness_hours)

        if leaf_wetness_hours > self.thresholds.leaf_wetness_high_hours:
            return DiseaseRisk(
                level=RiskLevel.HIGH,
                reason=f"High leaf wetness ({hours} h) creates conditions for scab infection",
            )
        if leaf_wetness_hours > self.thresholds.leaf_wetness_moderate_hours:
            return DiseaseRisk(
                level=RiskLevel.MODERATE,
                reason=f"Moderate leaf wetness ({hours} h) requires attention",
            )
        return DiseaseRisk(level=RiskLevel.LOW, reason="Leaf wetness is normal")


def assess_disease_risk(leaf_wetness_hours: float, air_temperature: float) -> DiseaseRisk:
    """Assess disease risk with the default thresholds."""
    return DiseaseRiskAssessor().assess(leaf_wetness_hours, air_temperature)
