"""Crowd forecaster: historical hourly busyness plus the weather delta."""

import logging
import statistics
from collections.abc import Iterable, Sequence

from workscore.consts import CROWD_HIGH_MIN, CROWD_LOW_MAX, FORECAST_HORIZON_HOURS
from workscore.context.weather import clamp
from workscore.models.model_score import (
    CrowdForecastPoint,
    CrowdLevel,
    ForecastBasis,
    HourlyProfile,
)
from workscore.models.model_signals import RawCheckinMetric
from workscore.signals.normalizer import rescale_ordinal

logger = logging.getLogger(__name__)


def build_hourly_profile(checkins: Iterable[RawCheckinMetric]) -> HourlyProfile:
    """Average check-in busyness (0-100) for each clock hour.

    Hours come from each check-in's own timestamp, so check-ins reported in
    local time produce a local-time profile. Hours without a busyness
    report are left empty.
    """
    buckets: list[list[float]] = [[] for _ in range(24)]
    for checkin in checkins:
        if checkin.busyness is not None:
            buckets[checkin.timestamp.hour].append(rescale_ordinal(checkin.busyness))

    return HourlyProfile(
        averages=tuple(statistics.fmean(b) if b else None for b in buckets),
        sample_counts=tuple(len(b) for b in buckets),
    )


def profile_from_history(history: Sequence[float | None]) -> HourlyProfile:
    """Wrap precomputed hourly averages in a HourlyProfile."""
    return HourlyProfile(averages=tuple(history))


def crowd_level(busyness: float) -> CrowdLevel:
    if busyness <= CROWD_LOW_MAX:
        return CrowdLevel.LOW
    if busyness >= CROWD_HIGH_MIN:
        return CrowdLevel.HIGH
    return CrowdLevel.MODERATE


def hour_label(hour: int) -> str:
    """12-hour clock label, e.g. 0 -> '12AM', 15 -> '3PM'."""
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}{suffix}"


class CrowdForecaster:
    """Deterministic next-hours busyness forecast.

    Each point is the historical average for its clock hour, shifted by the
    weather delta computed once for the scoring call and clamped to
    [0, 100]. Hours with no history fall back to the mean of the hours that
    have one. No model is fitted.
    """

    def __init__(self, horizon_hours: int = FORECAST_HORIZON_HOURS) -> None:
        self.horizon_hours = horizon_hours

    def forecast(
        self,
        profile: HourlyProfile,
        weather_delta: float = 0.0,
        start_hour: int = 0,
    ) -> list[CrowdForecastPoint]:
        """Forecast busyness for the current hour and the following ones.

        Args:
            profile: Historical busyness per clock hour
            weather_delta: Delta from WeatherAdjuster, reused for every point
            start_hour: Current clock hour (0-23)

        Returns:
            One point per forecast hour; empty when the profile has no data
        """
        if profile.is_empty:
            logger.debug("Empty hourly profile, no forecast")
            return []

        known = [v for v in profile.averages if v is not None]
        fallback = statistics.fmean(known)
        basis = ForecastBasis.WEATHER_ADJUSTED if weather_delta else ForecastBasis.HISTORICAL_AVERAGE

        points = []
        for offset in range(self.horizon_hours):
            hour = (start_hour + offset) % 24
            average = profile.averages[hour]
            busyness = clamp((fallback if average is None else average) + weather_delta)
            points.append(
                CrowdForecastPoint(
                    offset_hours=offset,
                    hour=hour,
                    label="Now" if offset == 0 else f"+{offset}h",
                    local_hour_label=hour_label(hour),
                    busyness=busyness,
                    level=crowd_level(busyness),
                    basis=basis,
                )
            )
        return points
