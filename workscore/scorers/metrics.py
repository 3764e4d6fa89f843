"""Scorers for the metric factors reported by check-ins: wifi, noise, laptop, crowd."""

import logging
import statistics

from workscore.consts import LIVE_BLEND_CAP, LIVE_BLEND_DIVISOR, LIVE_DOMINANCE_THRESHOLD
from workscore.context.weather import WeatherAdjuster
from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import (
    FactorName,
    FactorObservation,
    FactorScore,
    SourceTag,
)
from workscore.scorers.base import latest_observed_at
from workscore.scorers.reliability import ReliabilityModel, population_variance, weighted_mean
from workscore.signals.normalizer import SignalBag

logger = logging.getLogger(__name__)


def live_share(live_count: int) -> float:
    """Share of the blended value taken from live check-ins."""
    return min(live_count / LIVE_BLEND_DIVISOR, LIVE_BLEND_CAP)


class MetricScorer:
    """Scores wifi, noise and laptop-friendliness.

    Live check-ins are averaged when present. Without them the most recent
    review inference stands in, tagged ``inferred``; the reliability model
    dampens it. When both exist and live data is still sparse (live share
    of at most 0.5) the factor keeps the live value and reliability and is
    tagged ``blended``, with the inference only noted in the detail.
    """

    def __init__(self, factor: FactorName, reliability: ReliabilityModel) -> None:
        self.factor = factor
        self.reliability = reliability

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        live = bag.for_factor(self.factor, SourceTag.LIVE)
        inferred = bag.for_factor(self.factor, SourceTag.INFERRED)

        live_score = self._score_live(live, bag) if live else None
        inferred_score = self._score_inferred(inferred) if inferred else None

        if inferred_score is None:
            return live_score
        if live_score is None:
            return inferred_score

        share = live_share(len(live))
        if share > LIVE_DOMINANCE_THRESHOLD:
            return live_score

        # Sparse live data keeps its own value and weight; reviews only add provenance
        logger.debug(f"{bag.spot_id}/{self.factor.value}: live share {share:.2f}, tagging blended")
        usual = inferred[0].label or f"around {inferred_score.value:.0f}"
        return live_score.model_copy(
            update={
                "source": SourceTag.BLENDED,
                "detail": f"{len(live)} check-ins, usually {usual} per reviews",
            }
        )

    def _score_live(self, live: list[FactorObservation], bag: SignalBag) -> FactorScore:
        values = [obs.value for obs in live]
        weight = self.reliability.reliability(
            sample_size=len(live),
            coverage_ratio=min(1.0, len(live) / max(bag.checkin_count, 1)),
            variance=population_variance(values),
            external_trust=1.0,
            source_tag=SourceTag.LIVE,
        )
        return FactorScore(
            factor=self.factor,
            value=statistics.fmean(values),
            reliability=weight,
            source=SourceTag.LIVE,
            sample_size=len(live),
            last_observed_at=latest_observed_at(live),
            detail=f"{len(live)} check-ins",
        )

    def _score_inferred(self, inferred: list[FactorObservation]) -> FactorScore:
        sample_size = sum(obs.count for obs in inferred)
        weight = self.reliability.reliability(
            sample_size=sample_size,
            coverage_ratio=1.0,
            variance=population_variance([obs.value for obs in inferred]),
            external_trust=1.0,
            source_tag=SourceTag.INFERRED,
            raw_confidence=min(obs.confidence for obs in inferred),
        )
        label = inferred[0].label
        return FactorScore(
            factor=self.factor,
            value=weighted_mean(inferred),
            reliability=weight,
            source=SourceTag.INFERRED,
            sample_size=sample_size,
            last_observed_at=latest_observed_at(inferred),
            detail=f"inferred from {sample_size} reviews" + (f" ({label})" if label else ""),
        )


class CrowdScorer:
    """Scores how uncrowded a spot is from check-in busyness.

    Observations hold occupancy (higher is busier). The weather delta is
    added to the mean occupancy and clamped before inverting, so the
    sub-score stays within [0, 100] for any delta. Review inference carries
    no busyness, so there is no inferred fallback.
    """

    factor = FactorName.CROWD

    def __init__(self, reliability: ReliabilityModel, adjuster: WeatherAdjuster | None = None) -> None:
        self.reliability = reliability
        self.adjuster = adjuster or WeatherAdjuster()

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        live = bag.for_factor(self.factor, SourceTag.LIVE)
        if not live:
            return None

        occupancy = [obs.value for obs in live]
        mean_occupancy = statistics.fmean(occupancy)
        adjusted = self.adjuster.apply(mean_occupancy, context.weather_delta)

        weight = self.reliability.reliability(
            sample_size=len(live),
            coverage_ratio=min(1.0, len(live) / max(bag.checkin_count, 1)),
            variance=population_variance(occupancy),
            external_trust=1.0,
            source_tag=SourceTag.LIVE,
        )

        detail = f"{len(live)} check-ins, occupancy {mean_occupancy:.0f}"
        if context.weather_delta:
            detail += f" ({context.weather_delta:+.0f} weather)"

        return FactorScore(
            factor=self.factor,
            value=100.0 - adjusted,
            reliability=weight,
            source=SourceTag.LIVE,
            sample_size=len(live),
            last_observed_at=latest_observed_at(live),
            detail=detail,
        )
