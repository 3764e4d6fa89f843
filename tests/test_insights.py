"""Tests for spot insights: crowd level, best time, highlights and use cases."""

import pytest

from workscore.insights import (
    CheckinAverages,
    derive_best_time,
    derive_crowd_level,
    derive_highlights,
    derive_use_cases,
    score_tier,
)
from workscore.models.model_report import BestTime, ScoreTier
from workscore.models.model_score import (
    CrowdForecastPoint,
    CrowdLevel,
    ForecastBasis,
    MomentumSignal,
    MomentumTrend,
    ScoreBreakdown,
    ScoreStatus,
)
from workscore.models.model_signals import ExternalProviderRecord, ProviderName


def breakdown(work_score: int | None = 60, is_open: bool | None = None) -> ScoreBreakdown:
    status = ScoreStatus.SCORED if work_score is not None else ScoreStatus.INSUFFICIENT_DATA
    return ScoreBreakdown(status=status, work_score=work_score, is_open=is_open)


@pytest.fixture
def at_hour(make_checkin, now):
    """Factory for check-ins on the day before now at a given UTC hour."""

    def _make(hour: int, **fields):
        return make_checkin(hours_ago=24 + now.hour - hour, **fields)

    return _make


@pytest.mark.parametrize(
    ("average", "expected"),
    [
        (None, CrowdLevel.UNKNOWN),
        (1.0, CrowdLevel.LOW),
        (2.1, CrowdLevel.LOW),
        (3.0, CrowdLevel.MODERATE),
        (3.8, CrowdLevel.HIGH),
        (5.0, CrowdLevel.HIGH),
    ],
)
def test_derive_crowd_level(average, expected):
    assert derive_crowd_level(average) == expected


class TestBestTime:
    def test_most_active_bucket(self, at_hour):
        checkins = [at_hour(9), at_hour(14), at_hour(15), at_hour(16), at_hour(19)]
        assert derive_best_time(checkins) == BestTime.AFTERNOON

    def test_late_night(self, at_hour):
        assert derive_best_time([at_hour(23), at_hour(2)]) == BestTime.LATE

    def test_tie_goes_to_earlier_bucket(self, at_hour):
        assert derive_best_time([at_hour(7), at_hour(18)]) == BestTime.MORNING

    def test_no_checkins(self):
        assert derive_best_time([]) == BestTime.ANYTIME


@pytest.mark.parametrize(
    ("work_score", "expected"),
    [(None, ScoreTier.UNRATED), (0, ScoreTier.FAIR), (61, ScoreTier.FAIR), (62, ScoreTier.GOOD), (78, ScoreTier.GREAT)],
)
def test_score_tier(work_score, expected):
    assert score_tier(work_score) == expected


class TestCheckinAverages:
    def test_averages_on_reported_scales(self, make_checkin):
        averages = CheckinAverages(
            [
                make_checkin(wifi_speed=5, noise_level=2, laptop_friendly=True),
                make_checkin(wifi_speed=3, laptop_friendly=False),
                make_checkin(busyness=4),
            ]
        )

        assert averages.wifi == 4.0
        assert averages.noise == 2.0
        assert averages.busyness == 4.0
        assert averages.laptop_pct == 50.0

    def test_missing_fields_stay_none(self):
        averages = CheckinAverages([])
        assert averages.wifi is None
        assert averages.laptop_pct is None


class TestHighlights:
    def test_quiet_fast_laptop_spot(self, make_checkin):
        averages = CheckinAverages(
            [make_checkin(wifi_speed=5, noise_level=2, busyness=2, laptop_friendly=True)]
        )
        highlights = derive_highlights(averages, breakdown(), providers=[])

        assert highlights == ["Fast WiFi", "Laptop friendly", "Usually not crowded", "Typically quiet"]

    def test_capped_at_four(self, make_checkin):
        averages = CheckinAverages(
            [make_checkin(wifi_speed=5, noise_level=1, busyness=1, laptop_friendly=True)]
        )
        highlights = derive_highlights(averages, breakdown(is_open=True), providers=[])
        assert len(highlights) == 4
        assert "Open now" not in highlights

    def test_external_open_and_trending(self, spot_id):
        providers = [
            ExternalProviderRecord(spot_id=spot_id, provider=ProviderName.GOOGLE, rating=4.4, review_count=150)
        ]
        momentum = MomentumSignal(
            recent_count=8, prior_count=4, relative_change=1.0, score=97.7, trend=MomentumTrend.RISING
        )
        highlights = derive_highlights(
            CheckinAverages([]), breakdown(is_open=True), providers, momentum=momentum
        )

        assert highlights == ["Strong external reviews", "Open now", "Trending up"]

    def test_low_crowd_now_from_forecast(self):
        point = CrowdForecastPoint(
            offset_hours=0,
            hour=15,
            label="Now",
            local_hour_label="3PM",
            busyness=10.0,
            level=CrowdLevel.LOW,
            basis=ForecastBasis.HISTORICAL_AVERAGE,
        )
        highlights = derive_highlights(CheckinAverages([]), breakdown(), [], forecast=[point])
        assert highlights == ["Low crowd now"]

    def test_no_data_no_highlights(self):
        assert derive_highlights(CheckinAverages([]), breakdown(None), []) == []


class TestUseCases:
    def test_deep_work_and_laptop_sessions(self, make_checkin):
        averages = CheckinAverages([make_checkin(wifi_speed=4, laptop_friendly=True)])
        use_cases = derive_use_cases(averages, breakdown(82), [], CrowdLevel.LOW, BestTime.MORNING)

        assert use_cases == ["Deep work", "Laptop sessions"]

    def test_crowd_driven_use_cases(self):
        empty = CheckinAverages([])
        assert derive_use_cases(empty, breakdown(), [], CrowdLevel.MODERATE, BestTime.ANYTIME) == ["Group study"]
        assert derive_use_cases(empty, breakdown(), [], CrowdLevel.HIGH, BestTime.ANYTIME) == ["Social energy"]

    def test_coffee_meetups_and_late_sessions(self, spot_id):
        providers = [
            ExternalProviderRecord(spot_id=spot_id, provider=ProviderName.GOOGLE, rating=4.6),
            ExternalProviderRecord(spot_id=spot_id, provider=ProviderName.YELP, rating=4.0),
        ]
        use_cases = derive_use_cases(CheckinAverages([]), breakdown(), providers, CrowdLevel.LOW, BestTime.LATE)
        assert use_cases == ["Coffee meetups", "Late sessions"]

    def test_fallback(self):
        use_cases = derive_use_cases(CheckinAverages([]), breakdown(40), [], CrowdLevel.UNKNOWN, BestTime.ANYTIME)
        assert use_cases == ["Quick focus stop"]

    def test_capped_at_three(self, spot_id, make_checkin):
        averages = CheckinAverages([make_checkin(wifi_speed=5, laptop_friendly=True)])
        providers = [ExternalProviderRecord(spot_id=spot_id, provider=ProviderName.GOOGLE, rating=4.8)]
        use_cases = derive_use_cases(averages, breakdown(90), providers, CrowdLevel.HIGH, BestTime.LATE)

        assert use_cases == ["Deep work", "Laptop sessions", "Social energy"]
