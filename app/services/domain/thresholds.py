"""
Threshold configuration shared by the decision rules.
"""
from dataclasses import dataclass

from app.config import settings


@dataclass(frozen=True)
class DecisionThresholds:
    """Configuration for the orchard decision rules."""

    # Disease risk
    leaf_wetness_high_hours: float = 10.0
    """Leaf wetness strictly above this is High risk"""

    leaf_wetness_moderate_hours: float = 5.0
    """Leaf wetness strictly above this (and not High) is Moderate risk"""

    # Spray window
    max_wind_speed_ms: float = 5.0
    min_temperature_c: float = 10.0
    max_temperature_c: float = 25.0

    # Pests
    pest_trap_weekly_threshold: int = 5
    """Weekly trap catches strictly above this call for treatment"""

    @classmethod
    def from_settings(cls) -> "DecisionThresholds":
        """Build thresholds from application settings."""
        return cls(
            leaf_wetness_high_hours=settings.leaf_wetness_high_hours,
            leaf_wetness_moderate_hours=settings.leaf_wetness_moderate_hours,
            max_wind_speed_ms=settings.spray_max_wind_speed_ms,
            min_temperature_c=settings.spray_min_temperature_c,
            max_temperature_c=settings.spray_max_temperature_c,
            pest_trap_weekly_threshold=settings.pest_trap_weekly_threshold,
        )


def format_number(value: float) -> str:
    """Render a reading in its shortest exact form (12.0 -> '12', 10.00001 -> '10.00001')."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
