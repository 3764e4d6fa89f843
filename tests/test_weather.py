"""Tests for the weather context adjuster."""

import pytest

from workscore.context.weather import WeatherAdjuster
from workscore.models.model_signals import WeatherCondition, WeatherSignal


@pytest.fixture
def adjuster() -> WeatherAdjuster:
    return WeatherAdjuster()


def test_missing_weather_is_a_no_op(adjuster):
    assert adjuster.delta(None) == 0.0


@pytest.mark.parametrize(
    ("condition", "expected"),
    [
        (WeatherCondition.SUNNY, -4.0),
        (WeatherCondition.CLOUDY, 0.0),
        (WeatherCondition.RAINY, 12.0),
        (WeatherCondition.STORMY, 18.0),
        (WeatherCondition.SNOWY, 15.0),
        (WeatherCondition.COLD, 6.0),
        (WeatherCondition.HOT, 5.0),
    ],
)
def test_condition_deltas(adjuster, condition, expected):
    assert adjuster.delta(WeatherSignal(condition=condition)) == expected


def test_precipitation_adds_capped_amount(adjuster):
    light = WeatherSignal(condition=WeatherCondition.RAINY, precipitation_mm=2.0)
    heavy = WeatherSignal(condition=WeatherCondition.CLOUDY, precipitation_mm=50.0)

    assert adjuster.delta(light) == pytest.approx(20.0)
    assert adjuster.delta(heavy) == pytest.approx(15.0)


def test_probability_scales_delta(adjuster):
    weather = WeatherSignal(
        condition=WeatherCondition.RAINY, precipitation_mm=2.0, precipitation_probability=0.5
    )
    assert adjuster.delta(weather) == pytest.approx(10.0)


def test_delta_clamped(adjuster):
    storm = WeatherSignal(condition=WeatherCondition.STORMY, precipitation_mm=30.0)
    assert adjuster.delta(storm) == 25.0


@pytest.mark.parametrize("busyness", [0.0, 3.0, 50.0, 95.0, 100.0])
@pytest.mark.parametrize("delta", [-500.0, -25.0, 0.0, 12.0, 25.0, 500.0])
def test_apply_always_within_bounds(adjuster, busyness, delta):
    assert 0.0 <= adjuster.apply(busyness, delta) <= 100.0


def test_apply_shifts_busyness(adjuster):
    assert adjuster.apply(40.0, 12.0) == 52.0
    assert adjuster.apply(95.0, 25.0) == 100.0
    assert adjuster.apply(3.0, -4.0) == 0.0
