"""
API request models using Pydantic.
"""
from typing import Optional
from pydantic import BaseModel, Field

from app.domain.models import ParameterSnapshot


class EvaluationRequest(BaseModel):
    """
    Request body for the evaluate endpoint.

    Fields accept snake_case names or the short names used by the
    dashboard simulator (gdd, temperature, leafWetness, windSpeed,
    codlingMothTraps, soilMoisture).
    """
    accumulated_heat_units: float = Field(
        alias="gdd",
        ge=0,
        description="Heat units accumulated since season start (base 5°C)",
    )
    air_temperature: float = Field(
        alias="temperature",
        description="Air temperature in °C",
    )
    leaf_wetness_hours: float = Field(
        alias="leafWetness",
        ge=0,
        description="Hours of continuous leaf moisture",
    )
    wind_speed_ms: float = Field(
        alias="windSpeed",
        ge=0,
        description="Wind speed in m/s",
    )
    pest_trap_count: int = Field(
        alias="codlingMothTraps",
        ge=0,
        description="Codling moth trap catches per week",
    )
    soil_moisture_percent: Optional[float] = Field(
        default=None,
        alias="soilMoisture",
        ge=0,
        le=100,
        description="Soil moisture in percent",
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "gdd": 120,
                "temperature": 18,
                "leafWetness": 12,
                "windSpeed": 3,
                "codlingMothTraps": 2,
            }
        }

    def to_snapshot(self) -> ParameterSnapshot:
        """Convert to the domain snapshot."""
        return ParameterSnapshot(**self.model_dump())
