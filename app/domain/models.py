"""
Domain models for orchard state evaluation.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, files, HTTP, etc.).
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class RiskLevel(str, Enum):
    """Disease infection risk tiers."""
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class WindowStatus(str, Enum):
    """Spray window status."""
    OPEN = "Open"
    CLOSED = "Closed"


class Severity(str, Enum):
    """Recommendation severity, used for display priority."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class ParameterSnapshot(BaseModel):
    """
    Environmental readings for a single evaluation.

    The core assumes well-formed numbers; range checks belong to the
    boundary that builds the snapshot.
    """
    accumulated_heat_units: float = Field(
        description="Heat units accumulated since season start (base 5°C)"
    )
    air_temperature: float = Field(description="Air temperature in °C")
    leaf_wetness_hours: float = Field(description="Hours of continuous leaf moisture")
    wind_speed_ms: float = Field(description="Wind speed in m/s")
    pest_trap_count: int = Field(description="Codling moth trap catches per week")
    soil_moisture_percent: Optional[float] = Field(
        default=None,
        description="Soil moisture (0-100). Accepted but not used by the rules"
    )

    class Config:
        frozen = True


class PhenologyStage(BaseModel):
    """A BBCH development stage and the heat units at which it begins."""
    stage_code: int = Field(description="BBCH stage code")
    stage_name: str
    heat_threshold: float = Field(
        description="Minimum accumulated heat units at which this stage begins"
    )
    description: Optional[str] = None

    class Config:
        frozen = True


class DiseaseRisk(BaseModel):
    """Disease risk classification."""
    level: RiskLevel
    reason: str

    class Config:
        frozen = True


class WeatherWindow(BaseModel):
    """Spray window determination."""
    status: WindowStatus
    reason: str

    class Config:
        frozen = True


class Recommendation(BaseModel):
    """A single actionable recommendation."""
    severity: Severity
    title: str
    message: str

    class Config:
        frozen = True


class OrchardState(BaseModel):
    """Full diagnostic result for one snapshot."""
    pheno_phase: PhenologyStage
    disease_risk: DiseaseRisk
    weather_window: WeatherWindow
    recommendations: List[Recommendation] = Field(min_length=1)

    class Config:
        frozen = True
