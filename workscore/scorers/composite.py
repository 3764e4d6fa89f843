"""Composite scoring: combine factor sub-scores into the Work Score."""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from workscore.consts import BALANCED_DOMINANCE_RATIO, STALENESS_THRESHOLD
from workscore.exceptions import ScoringInputError
from workscore.models.model_eval import FactorWeights
from workscore.models.model_score import (
    FACTOR_ORDER,
    FactorName,
    FactorScore,
    ScoreAnalysis,
    ScoreBreakdown,
    ScoreStatus,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def aggregate(
    factors: Iterable[FactorScore],
    weights: FactorWeights | None = None,
    now: datetime | None = None,
    staleness_threshold: timedelta = STALENESS_THRESHOLD,
) -> ScoreBreakdown:
    """Combine factor scores into a Work Score with per-factor attribution.

    The combination weight of each present, non-gating factor is its base
    weight times its reliability, renormalized to sum to 1. Absent factors
    have no entry, so their weight is redistributed among the others
    instead of defaulting to a neutral value.

    Args:
        factors: At most one FactorScore per factor
        weights: Base weights (defaults to FactorWeights())
        now: Reference time for staleness; staleness is not computed without it
        staleness_threshold: Age of the newest observation that marks data stale

    Returns:
        ScoreBreakdown, with status insufficient_data and no work score when
        no factor carries any weight

    Raises:
        ScoringInputError: If a factor appears more than once
    """
    weights = weights or FactorWeights()

    by_factor: dict[FactorName, FactorScore] = {}
    for factor_score in factors:
        if factor_score.factor in by_factor:
            msg = f"Duplicate score for factor '{factor_score.factor.value}'"
            raise ScoringInputError(msg)
        by_factor[factor_score.factor] = factor_score
    ordered = [by_factor[name] for name in FACTOR_ORDER if name in by_factor]

    gate = by_factor.get(FactorName.OPEN_STATUS)
    is_open = gate.value >= 50.0 if gate is not None else None

    contributing = [f for f in ordered if not f.gating]
    raw_weights = {f.factor: weights.for_factor(f.factor) * f.reliability for f in contributing}
    total_weight = sum(raw_weights.values())

    last_observed_at = max(
        (f.last_observed_at for f in contributing if f.last_observed_at is not None),
        default=None,
    )
    stale = (
        now is not None
        and last_observed_at is not None
        and now - last_observed_at > staleness_threshold
    )

    if total_weight <= 0:
        logger.debug(f"No weighted factors among {len(ordered)} present, insufficient data")
        return ScoreBreakdown(
            status=ScoreStatus.INSUFFICIENT_DATA,
            work_score=None,
            factors=[
                f if f.gating else f.model_copy(update={"weight": 0.0, "contribution": 0.0})
                for f in ordered
            ],
            confidence=0.0,
            stale=stale,
            last_observed_at=last_observed_at,
            is_open=is_open,
        )

    attributed = []
    for f in ordered:
        if f.gating:
            attributed.append(f)
            continue
        weight = raw_weights[f.factor] / total_weight
        attributed.append(
            f.model_copy(update={"weight": weight, "contribution": weight * f.value})
        )

    raw_score = sum(f.contribution for f in attributed if f.contribution is not None)
    work_score = max(0, min(100, round_half_up(raw_score)))

    base_total = sum(weights.as_dict().values())
    confidence = min(1.0, total_weight / base_total) if base_total > 0 else 0.0

    return ScoreBreakdown(
        status=ScoreStatus.SCORED,
        work_score=work_score,
        factors=attributed,
        confidence=confidence,
        stale=stale,
        last_observed_at=last_observed_at,
        is_open=is_open,
        analysis=analyze_factor_dominance(attributed),
    )


def analyze_factor_dominance(factors: list[FactorScore]) -> ScoreAnalysis:
    """Analyze which factor contributes most to the Work Score.

    Dominance ratio interpretation:
    - < 1.2: Balanced across factors
    - 1.2 - 1.5: Slight emphasis on one factor
    - 1.5 - 2.0: Notable skew
    - > 2.0: Score dominated by a single factor

    Args:
        factors: Attributed factor scores (gating factors are ignored)

    Returns:
        ScoreAnalysis with dominant factor (None when balanced) and ratio
    """
    contributions = sorted(
        ((f.factor, f.contribution) for f in factors if f.contribution is not None),
        key=lambda x: x[1],
        reverse=True,
    )
    if not contributions:
        return ScoreAnalysis()

    highest_factor, highest = contributions[0]
    second_highest = contributions[1][1] if len(contributions) > 1 else 0.0

    if second_highest == 0:
        if highest == 0:
            return ScoreAnalysis(dominant_factor=None, dominance_ratio=1.0)
        # Only one factor contributes
        return ScoreAnalysis(dominant_factor=highest_factor, dominance_ratio=999.0)

    ratio = highest / second_highest
    return ScoreAnalysis(
        dominant_factor=highest_factor if ratio >= BALANCED_DOMINANCE_RATIO else None,
        dominance_ratio=ratio,
    )


def main() -> None:
    """Demonstrate aggregation and dominance analysis."""
    from workscore.models.model_score import SourceTag

    print("Composite Scoring Demo")
    print("=" * 50)

    test_cases = [
        (
            "Well covered cafe",
            [
                FactorScore(factor=FactorName.WIFI, value=90.0, reliability=0.8, source=SourceTag.LIVE, sample_size=16),
                FactorScore(factor=FactorName.NOISE, value=60.0, reliability=0.7, source=SourceTag.LIVE, sample_size=12),
                FactorScore(factor=FactorName.CROWD, value=55.0, reliability=0.7, source=SourceTag.LIVE, sample_size=12),
            ],
        ),
        (
            "Inferred only",
            [
                FactorScore(factor=FactorName.WIFI, value=80.0, reliability=0.1, source=SourceTag.INFERRED, sample_size=1),
            ],
        ),
        (
            "Closed library",
            [
                FactorScore(factor=FactorName.VENUE_TYPE, value=90.0, reliability=0.4, source=SourceTag.EXTERNAL, sample_size=2),
                FactorScore(
                    factor=FactorName.OPEN_STATUS, value=0.0, reliability=0.0,
                    source=SourceTag.EXTERNAL, sample_size=1, gating=True,
                ),
            ],
        ),
        ("No data", []),
    ]

    for description, factors in test_cases:
        breakdown = aggregate(factors)
        print(f"\n{description}:")
        print(f"  Status: {breakdown.status.value}")
        print(f"  Work Score: {breakdown.work_score}")
        print(f"  Confidence: {breakdown.confidence:.2f}")
        print(f"  Open: {breakdown.is_open}")
        for f in breakdown.factors:
            weight = f"{f.weight:.2f}" if f.weight is not None else "gate"
            print(f"    {f.factor.value:<16} {f.value:5.1f}  w={weight}")
        dominant = breakdown.analysis.dominant_factor
        print(f"  Dominant: {dominant.value if dominant else 'balanced'} "
              f"({breakdown.analysis.dominance_ratio:.2f})")


if __name__ == "__main__":
    main()
