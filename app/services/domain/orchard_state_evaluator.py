"""
Domain service: Orchard state evaluation.

Facade over the four decision rules:
- Phenological stage resolution from accumulated heat units
- Disease risk from leaf wetness
- Spray window from temperature and wind
- Recommendation synthesis from all of the above plus pest traps

Pure and synchronous. Fetching the stage table is the caller's job.
"""
import logging
from typing import Optional, Sequence

from app.domain.models import OrchardState, ParameterSnapshot, PhenologyStage
from app.services.domain.disease_risk_assessor import DiseaseRiskAssessor
from app.services.domain.phenology_resolver import PhenologyResolver
from app.services.domain.recommendation_synthesizer import RecommendationSynthesizer
from app.services.domain.spray_window_evaluator import SprayWindowEvaluator
from app.services.domain.thresholds import DecisionThresholds

logger = logging.getLogger(__name__)


class OrchardStateEvaluator:
    """
    Domain service turning a parameter snapshot into an OrchardState.

    Holds only immutable configuration, so one instance can serve
    concurrent evaluations.
    """

    def __init__(self, thresholds: Optional[DecisionThresholds] = None):
        """
        Initialize the evaluator.

        Args:
            thresholds: Rule thresholds; defaults reproduce the baseline model
        """
        self.thresholds = thresholds or DecisionThresholds()
        self.phenology_resolver = PhenologyResolver()
        self.disease_risk_assessor = DiseaseRiskAssessor(self.thresholds)
        self.spray_window_evaluator = SprayWindowEvaluator(self.thresholds)
        self.recommendation_synthesizer = RecommendationSynthesizer(self.thresholds)

        logger.info(f"Initialized OrchardStateEvaluator with thresholds: "
                    f"leaf_wetness={self.thresholds.leaf_wetness_moderate_hours}/"
                    f"{self.thresholds.leaf_wetness_high_hours}h, "
                    f"wind<={self.thresholds.max_wind_speed_ms}m/s, "
                    f"temp={self.thresholds.min_temperature_c}-"
                    f"{self.thresholds.max_temperature_c}°C")

    def evaluate(
        self,
        snapshot: ParameterSnapshot,
        stages: Optional[Sequence[PhenologyStage]],
    ) -> OrchardState:
        """
        Evaluate the orchard state for a snapshot.

        Args:
            snapshot: Environmental readings
            stages: Phenology stage table, or None when it could not be loaded

        Returns:
            OrchardState. A failed stage lookup degrades to the dormant
            fallback stage while every other part is still computed.
        """
        # Step 1: Phenological stage
        pheno_phase = self.phenology_resolver.resolve(
            snapshot.accumulated_heat_units, stages
        )

        # Step 2: Disease risk and spray window are independent
        disease_risk = self.disease_risk_assessor.assess(
            snapshot.leaf_wetness_hours, snapshot.air_temperature
        )
        weather_window = self.spray_window_evaluator.evaluate(
            snapshot.air_temperature, snapshot.wind_speed_ms
        )

        # Step 3: Recommendations
        recommendations = self.recommendation_synthesizer.synthesize(
            snapshot, disease_risk, weather_window
        )

        logger.info(f"Evaluated orchard state: stage={pheno_phase.stage_name}, "
                    f"disease_risk={disease_risk.level.value}, "
                    f"window={weather_window.status.value}, "
                    f"recommendations={len(recommendations)}")

        return OrchardState(
            pheno_phase=pheno_phase,
            disease_risk=disease_risk,
            weather_window=weather_window,
            recommendations=recommendations,
        )
