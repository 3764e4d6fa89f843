"""Crowd forecasting from historical hourly busyness."""

from workscore.forecast.crowd import (
    CrowdForecaster,
    build_hourly_profile,
    crowd_level,
    profile_from_history,
)

__all__ = [
    "CrowdForecaster",
    "build_hourly_profile",
    "crowd_level",
    "profile_from_history",
]
