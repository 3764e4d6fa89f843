"""Weather context adjuster for busyness."""

import logging

from workscore.consts import (
    MAX_WEATHER_DELTA,
    WEATHER_CONDITION_DELTAS,
    WEATHER_PRECIPITATION_CAP,
    WEATHER_PRECIPITATION_PER_MM,
)
from workscore.models.model_signals import WeatherSignal

logger = logging.getLogger(__name__)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


class WeatherAdjuster:
    """Turns a weather signal into an additive busyness delta.

    Bad weather pushes people indoors, so rain, snow and storms raise the
    expected occupancy of indoor spots; a sunny day lowers it slightly.

        delta = condition_delta + min(precipitation_mm * 4, 15)
        delta *= precipitation_probability      (when given)
        delta  = clamp(delta, -25, +25)

    The delta applies to the crowd factor only. The forecaster reuses the
    same value for every forecast hour.
    """

    def delta(self, weather: WeatherSignal | None) -> float:
        """Calculate the busyness delta for a weather signal.

        Args:
            weather: Weather at the spot, or None when the fetch failed

        Returns:
            Delta in occupancy points; 0.0 when no weather is available
        """
        if weather is None:
            logger.debug("No weather signal, skipping busyness adjustment")
            return 0.0

        delta = WEATHER_CONDITION_DELTAS.get(weather.condition.value, 0.0)

        if weather.precipitation_mm is not None:
            delta += min(
                weather.precipitation_mm * WEATHER_PRECIPITATION_PER_MM,
                WEATHER_PRECIPITATION_CAP,
            )

        if weather.precipitation_probability is not None:
            delta *= weather.precipitation_probability

        return clamp(delta, -MAX_WEATHER_DELTA, MAX_WEATHER_DELTA)

    def apply(self, busyness: float, delta: float) -> float:
        """Shift a 0-100 busyness value by ``delta``, clamped to [0, 100]."""
        return clamp(busyness + delta)
