"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from workscore.engine import ScoringEngine
from workscore.models.model_eval import ScoreContext
from workscore.models.model_signals import (
    ExternalProviderRecord,
    InferredReviewSignal,
    ProviderName,
    RawCheckinMetric,
    SpotInputs,
    WeatherCondition,
    WeatherSignal,
)
from workscore.scorers.reliability import ReliabilityModel
from workscore.signals.normalizer import SignalNormalizer


@pytest.fixture
def now() -> datetime:
    """Fixed reference time: a Tuesday afternoon in UTC."""
    return datetime(2026, 3, 10, 15, 0, tzinfo=UTC)


@pytest.fixture
def spot_id() -> str:
    return "spot-blue-bottle"


@pytest.fixture
def make_checkin(now, spot_id) -> Callable[..., RawCheckinMetric]:
    """Factory for check-ins at the sample spot, submitted ``hours_ago`` before now."""

    def _make(hours_ago: float = 1.0, **fields) -> RawCheckinMetric:
        fields.setdefault("spot_id", spot_id)
        return RawCheckinMetric(timestamp=now - timedelta(hours=hours_ago), **fields)

    return _make


@pytest.fixture
def context(now) -> ScoreContext:
    """Scoring context at now without weather."""
    return ScoreContext(now=now)


@pytest.fixture
def reliability_model() -> ReliabilityModel:
    return ReliabilityModel()


@pytest.fixture
def normalizer() -> SignalNormalizer:
    return SignalNormalizer()


@pytest.fixture
def engine() -> ScoringEngine:
    return ScoringEngine()


@pytest.fixture
def sample_checkins(make_checkin) -> list[RawCheckinMetric]:
    """Eight afternoon check-ins at a quiet, well connected cafe."""
    return [
        make_checkin(
            hours_ago=2 + i * 24,
            wifi_speed=5 if i % 2 == 0 else 4,
            noise_level=2,
            busyness=2,
            laptop_friendly=True,
            tags=frozenset({"Wi-Fi", "outlets"}) if i < 4 else frozenset({"quiet"}),
            price_level=2,
        )
        for i in range(8)
    ]


@pytest.fixture
def sample_inferred(now, spot_id) -> InferredReviewSignal:
    return InferredReviewSignal(
        spot_id=spot_id,
        has_wifi=True,
        wifi_confidence=0.9,
        inferred_noise="quiet",
        noise_confidence=0.7,
        good_for_studying=True,
        studying_confidence=0.8,
        review_count=24,
        analyzed_at=now - timedelta(days=3),
    )


@pytest.fixture
def sample_providers(now, spot_id) -> list[ExternalProviderRecord]:
    return [
        ExternalProviderRecord(
            spot_id=spot_id,
            provider=ProviderName.GOOGLE,
            rating=4.5,
            review_count=320,
            price_level=2,
            categories=("cafe", "food"),
            is_open=True,
            fetched_at=now - timedelta(hours=6),
        ),
        ExternalProviderRecord(
            spot_id=spot_id,
            provider=ProviderName.YELP,
            rating=4.0,
            review_count=85,
            categories=("Coffee & Tea",),
            is_open=True,
            fetched_at=now - timedelta(hours=6),
        ),
    ]


@pytest.fixture
def sample_inputs(spot_id, sample_checkins, sample_inferred, sample_providers) -> SpotInputs:
    """A fully populated spot snapshot."""
    return SpotInputs(
        spot_id=spot_id,
        name="Blue Bottle",
        checkins=tuple(sample_checkins),
        inferred=(sample_inferred,),
        providers=tuple(sample_providers),
        weather=WeatherSignal(condition=WeatherCondition.CLOUDY),
        venue_types=("cafe",),
    )
