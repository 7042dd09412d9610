"""
API response models using Pydantic.
"""
from typing import List
from pydantic import BaseModel, Field

from app.domain.models import (
    DiseaseRisk,
    OrchardState,
    PhenologyStage,
    Recommendation,
    WeatherWindow,
)


class OrchardStateResponse(BaseModel):
    """Response model for the evaluate endpoint."""
    pheno_phase: PhenologyStage = Field(
        description="Resolved phenological stage"
    )
    disease_risk: DiseaseRisk = Field(
        description="Disease risk level and reason"
    )
    weather_window: WeatherWindow = Field(
        description="Spray window status and reason"
    )
    recommendations: List[Recommendation] = Field(
        description="Recommendations in priority order, never empty"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "pheno_phase": {
                    "stage_code": 7,
                    "stage_name": "Green tip",
                    "heat_threshold": 100,
                    "description": "Green leaf tips visible",
                },
                "disease_risk": {
                    "level": "High",
                    "reason": "High leaf wetness (12 h) creates conditions for scab infection",
                },
                "weather_window": {
                    "status": "Open",
                    "reason": "Conditions are suitable for spraying",
                },
                "recommendations": [
                    {
                        "severity": "critical",
                        "title": "Scab protection",
                        "message": "High leaf wetness (12 h). Fungicide treatment is "
                                   "recommended according to the Mills table at 18°C.",
                    }
                ],
            }
        }

    @classmethod
    def from_state(cls, state: OrchardState) -> "OrchardStateResponse":
        return cls(
            pheno_phase=state.pheno_phase,
            disease_risk=state.disease_risk,
            weather_window=state.weather_window,
            recommendations=list(state.recommendations),
        )


class StageTableResponse(BaseModel):
    """Response model for the stage table endpoint."""
    count: int = Field(description="Number of stages in the table")
    stages: List[PhenologyStage] = Field(
        description="Stages sorted by heat threshold"
    )
