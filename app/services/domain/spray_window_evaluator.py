"""
Domain service: Spray window evaluation from temperature and wind.
"""
from typing import List, Optional

from app.domain.models import WeatherWindow, WindowStatus
from app.services.domain.thresholds import DecisionThresholds, format_number


SUITABLE_REASON = "Conditions are suitable for spraying"


class SprayWindowEvaluator:
    """
    Decides whether chemical application is permitted.

    Every disqualifying check runs, so the reason lists all of them
    rather than only the first that failed.
    """

    def __init__(self, thresholds: Optional[DecisionThresholds] = None):
        self.thresholds = thresholds or DecisionThresholds()

    def evaluate(self, air_temperature: float, wind_speed_ms: float) -> WeatherWindow:
        """
        Evaluate the spray window.

        Args:
            air_temperature: Air temperature in °C
            wind_speed_ms: Wind speed in m/s

        Returns:
            WeatherWindow with status and comma-joined reasons
        """
        reasons: List[str] = []
        temperature = format_number(air_temperature)

        if wind_speed_ms > self.thresholds.max_wind_speed_ms:
            reasons.append(
                f"wind speed {format_number(wind_speed_ms)} m/s exceeds safe threshold"
            )
        if air_temperature < self.thresholds.min_temperature_c:
            reasons.append(f"temperature {temperature}°C too low for treatment efficacy")
        if air_temperature > self.thresholds.max_temperature_c:
            reasons.append(f"temperature {temperature}°C too high, scorch risk")

        if reasons:
            return WeatherWindow(status=WindowStatus.CLOSED, reason=", ".join(reasons))
        return WeatherWindow(status=WindowStatus.OPEN, reason=SUITABLE_REASON)


def evaluate_spray_window(air_temperature: float, wind_speed_ms: float) -> WeatherWindow:
    """Evaluate the spray window with the default thresholds."""
    return SprayWindowEvaluator().evaluate(air_temperature, wind_speed_ms)
