"""Scoring engine: one call from raw spot inputs to a SpotReport."""

import logging
from collections.abc import Iterable
from datetime import datetime

from workscore.context.weather import WeatherAdjuster
from workscore.forecast.crowd import CrowdForecaster, build_hourly_profile, profile_from_history
from workscore.insights import (
    CheckinAverages,
    derive_best_time,
    derive_crowd_level,
    derive_highlights,
    derive_use_cases,
    score_tier,
)
from workscore.models.common import _require_aware, _utc_now
from workscore.models.model_eval import EngineConfig, ScoreContext
from workscore.models.model_report import SpotReport
from workscore.models.model_signals import SpotInputs
from workscore.scorers.momentum import MomentumDetector
from workscore.scorers.registry import FactorScorerRegistry
from workscore.scorers.reliability import ReliabilityModel
from workscore.signals.normalizer import SignalNormalizer

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Runs the full pipeline for a spot.

    Pipeline:
    1. Normalize records into a SignalBag
    2. Compute the weather delta once
    3. Score and aggregate all factors
    4. Forecast busyness for the next hours, reusing the weather delta
    5. Derive display insights

    The engine holds only immutable configuration. Scoring the same inputs
    at the same ``now`` always yields the same report.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.normalizer = SignalNormalizer()
        self.adjuster = WeatherAdjuster()
        self.registry = FactorScorerRegistry(ReliabilityModel(self.config.reliability), self.adjuster)
        self.forecaster = CrowdForecaster()

    def score_spot(
        self,
        inputs: SpotInputs,
        now: datetime | None = None,
        forecast_start_hour: int | None = None,
    ) -> SpotReport:
        """Score a single spot.

        Args:
            inputs: Everything fetched for the spot
            now: Reference time (defaults to now in UTC); its clock hour is
                the first forecast hour unless overridden
            forecast_start_hour: First forecast hour (0-23); only the
                forecast uses it, scoring stays anchored at ``now``

        Returns:
            SpotReport with breakdown, forecast and insights

        Raises:
            ScoringInputError: If records are inconsistent
            ValueError: If ``now`` is naive or the start hour is out of range
        """
        now = _require_aware(now) or _utc_now()
        start_hour = now.hour if forecast_start_hour is None else forecast_start_hour
        if not 0 <= start_hour <= 23:
            msg = f"forecast_start_hour must be within [0, 23], got {start_hour}"
            raise ValueError(msg)

        bag = self.normalizer.normalize_inputs(inputs)
        weather_delta = self.adjuster.delta(inputs.weather)
        context = ScoreContext(now=now, weather_delta=weather_delta, config=self.config)

        breakdown = self.registry.score_spot(bag, context)
        momentum = MomentumDetector(self.config.momentum_min_checkins).detect(bag.checkin_times, now)

        if inputs.hourly_history is not None:
            profile = profile_from_history(inputs.hourly_history)
        else:
            profile = build_hourly_profile(inputs.checkins)
        forecast = self.forecaster.forecast(profile, weather_delta, start_hour=start_hour)

        averages = CheckinAverages(inputs.checkins)
        crowd_level = derive_crowd_level(averages.busyness)
        best_time = derive_best_time(inputs.checkins)

        report = SpotReport(
            spot_id=inputs.spot_id,
            name=inputs.name,
            computed_at=now,
            breakdown=breakdown,
            tier=score_tier(breakdown.work_score),
            forecast=forecast,
            weather_delta=weather_delta,
            momentum=momentum,
            crowd_level=crowd_level,
            best_time=best_time,
            highlights=derive_highlights(averages, breakdown, inputs.providers, forecast, momentum),
            use_cases=derive_use_cases(averages, breakdown, inputs.providers, crowd_level, best_time),
            score_version=self.config.score_version,
        )

        logger.info(
            f"Scored {inputs.spot_id}: {breakdown.status.value}, "
            f"work_score={breakdown.work_score}, confidence={breakdown.confidence:.2f}, "
            f"{len(breakdown.factors)} factors{' (stale)' if breakdown.stale else ''}"
        )
        return report

    def score_batch(
        self,
        spots: Iterable[SpotInputs],
        now: datetime | None = None,
        forecast_start_hour: int | None = None,
    ) -> list[SpotReport]:
        """Score multiple spots against the same reference time.

        Validation errors for any spot fail the whole call.
        """
        now = _require_aware(now) or _utc_now()
        return [self.score_spot(spot, now, forecast_start_hour) for spot in spots]
