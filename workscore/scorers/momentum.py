"""Momentum detector comparing two consecutive check-in windows."""

import logging
from collections.abc import Iterable
from datetime import datetime

from scipy.stats import norm

from workscore.consts import (
    MOMENTUM_CHANGE_SCALE,
    MOMENTUM_MIN_CHECKINS,
    MOMENTUM_STEADY_BAND,
    MOMENTUM_WINDOW,
)
from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import (
    FactorName,
    FactorScore,
    MomentumSignal,
    MomentumTrend,
    SourceTag,
)
from workscore.scorers.reliability import ReliabilityModel
from workscore.signals.normalizer import SignalBag

logger = logging.getLogger(__name__)


class MomentumDetector:
    """Flags rising or falling popularity from check-in volume.

    Algorithm:
    1. Count check-ins in [now - 7d, now) and [now - 14d, now - 7d)
    2. Require a minimum count in BOTH windows, else no signal
    3. relative_change = (recent - prior) / prior
    4. Convert to 0-100 via CDF: norm.cdf(change / 0.5) * 100 (50 = flat)
    """

    def __init__(self, min_checkins: int = MOMENTUM_MIN_CHECKINS) -> None:
        self.min_checkins = min_checkins

    def detect(self, checkin_times: Iterable[datetime], now: datetime) -> MomentumSignal | None:
        """Compare the trailing window against the one before it.

        Args:
            checkin_times: Timestamps of the spot's check-ins
            now: End of the trailing window

        Returns:
            MomentumSignal, or None when either window is too sparse
        """
        recent_start = now - MOMENTUM_WINDOW
        prior_start = recent_start - MOMENTUM_WINDOW

        recent = 0
        prior = 0
        for ts in checkin_times:
            if recent_start <= ts < now:
                recent += 1
            elif prior_start <= ts < recent_start:
                prior += 1

        if recent < self.min_checkins or prior < self.min_checkins:
            logger.debug(
                f"Momentum skipped: {recent} recent / {prior} prior check-ins "
                f"(minimum {self.min_checkins} per window)"
            )
            return None

        change = (recent - prior) / prior
        score = float(norm.cdf(change / MOMENTUM_CHANGE_SCALE) * 100)

        if change > MOMENTUM_STEADY_BAND:
            trend = MomentumTrend.RISING
        elif change < -MOMENTUM_STEADY_BAND:
            trend = MomentumTrend.FALLING
        else:
            trend = MomentumTrend.STEADY

        return MomentumSignal(
            recent_count=recent,
            prior_count=prior,
            relative_change=change,
            score=score,
            trend=trend,
        )


class MomentumScorer:
    """Scores the momentum factor from a MomentumDetector signal."""

    factor = FactorName.MOMENTUM

    def __init__(self, reliability: ReliabilityModel) -> None:
        self.reliability = reliability

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        detector = MomentumDetector(context.config.momentum_min_checkins)
        signal = detector.detect(bag.checkin_times, context.now)
        if signal is None:
            return None
        return self.from_signal(signal, bag)

    def from_signal(self, signal: MomentumSignal, bag: SignalBag) -> FactorScore:
        sample_size = signal.recent_count + signal.prior_count
        weight = self.reliability.reliability(
            sample_size=sample_size,
            coverage_ratio=1.0,
            variance=0.0,
            external_trust=1.0,
            source_tag=SourceTag.LIVE,
        )
        return FactorScore(
            factor=self.factor,
            value=signal.score,
            reliability=weight,
            source=SourceTag.LIVE,
            sample_size=sample_size,
            last_observed_at=bag.last_checkin_at,
            detail=f"{signal.trend.value} ({signal.relative_change:+.0%} week over week)",
        )
