"""Tests for the crowd forecaster."""

import pytest

from workscore.forecast.crowd import (
    CrowdForecaster,
    build_hourly_profile,
    crowd_level,
    hour_label,
    profile_from_history,
)
from workscore.models.model_score import CrowdLevel, ForecastBasis, HourlyProfile


def flat_profile(value: float) -> HourlyProfile:
    return profile_from_history([value] * 24)


class TestBuildHourlyProfile:
    def test_averages_per_clock_hour(self, now, make_checkin):
        # now is 15:00; 24 hours ago is also 15:00
        profile = build_hourly_profile(
            [make_checkin(hours_ago=0, busyness=5), make_checkin(hours_ago=24, busyness=1)]
        )

        assert profile.averages[15] == 50.0
        assert profile.sample_counts[15] == 2
        assert profile.averages[14] is None

    def test_checkins_without_busyness_ignored(self, make_checkin):
        profile = build_hourly_profile([make_checkin(wifi_speed=4)])
        assert profile.is_empty


class TestCrowdForecaster:
    def test_six_points_with_labels(self):
        points = CrowdForecaster().forecast(flat_profile(40.0), start_hour=15)

        assert len(points) == 6
        assert [p.label for p in points] == ["Now", "+1h", "+2h", "+3h", "+4h", "+5h"]
        assert [p.offset_hours for p in points] == [0, 1, 2, 3, 4, 5]
        assert points[0].local_hour_label == "3PM"
        assert all(p.basis == ForecastBasis.HISTORICAL_AVERAGE for p in points)

    def test_hours_wrap_past_midnight(self):
        points = CrowdForecaster().forecast(flat_profile(40.0), start_hour=22)
        assert [p.hour for p in points] == [22, 23, 0, 1, 2, 3]
        assert points[2].local_hour_label == "12AM"

    def test_uses_each_hours_average(self):
        history = [None] * 24
        history[9] = 20.0
        history[10] = 80.0
        points = CrowdForecaster().forecast(profile_from_history(history), start_hour=9)

        assert points[0].busyness == 20.0
        assert points[0].level == CrowdLevel.LOW
        assert points[1].busyness == 80.0
        assert points[1].level == CrowdLevel.HIGH
        # Hours without history fall back to the mean of known hours
        assert points[2].busyness == 50.0
        assert points[2].level == CrowdLevel.MODERATE

    def test_same_weather_delta_for_every_point(self):
        points = CrowdForecaster().forecast(flat_profile(40.0), weather_delta=12.0, start_hour=8)

        assert {p.busyness for p in points} == {52.0}
        assert all(p.basis == ForecastBasis.WEATHER_ADJUSTED for p in points)

    @pytest.mark.parametrize("delta", [-1000.0, -25.0, 25.0, 1000.0])
    def test_forecast_clamped(self, delta):
        points = CrowdForecaster().forecast(flat_profile(90.0), weather_delta=delta)
        assert all(0.0 <= p.busyness <= 100.0 for p in points)

    def test_empty_profile_yields_no_forecast(self, now):
        assert CrowdForecaster().forecast(profile_from_history([None] * 24), start_hour=now.hour) == []

    def test_history_must_cover_a_day(self):
        with pytest.raises(ValueError):
            profile_from_history([10.0] * 12)


@pytest.mark.parametrize(
    ("busyness", "expected"),
    [
        (0.0, CrowdLevel.LOW),
        (34.0, CrowdLevel.LOW),
        (34.5, CrowdLevel.MODERATE),
        (66.9, CrowdLevel.MODERATE),
        (67.0, CrowdLevel.HIGH),
        (100.0, CrowdLevel.HIGH),
    ],
)
def test_crowd_level(busyness, expected):
    assert crowd_level(busyness) == expected


@pytest.mark.parametrize(
    ("hour", "expected"), [(0, "12AM"), (9, "9AM"), (12, "12PM"), (15, "3PM"), (23, "11PM")]
)
def test_hour_label(hour, expected):
    assert hour_label(hour) == expected
