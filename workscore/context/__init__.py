"""Context signals that adjust scores without being factors themselves."""

from workscore.context.weather import WeatherAdjuster

__all__ = ["WeatherAdjuster"]
