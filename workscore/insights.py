"""Display insights derived from a scored spot.

Highlights and use cases are short labels shown next to the Work Score.
They are computed from the raw check-in averages (on the 1-5 scale users
report on) and the breakdown, never fed back into the score.
"""

import statistics
from collections.abc import Sequence

from workscore.consts import (
    COFFEE_MEETUP_RATING_MIN,
    CROWD_LEVEL_HIGH_MIN,
    CROWD_LEVEL_LOW_MAX,
    FAST_WIFI_MIN,
    LAPTOP_FRIENDLY_PCT_MIN,
    LAPTOP_SESSION_PCT_MIN,
    LAPTOP_SESSION_WIFI_MIN,
    MAX_HIGHLIGHTS,
    MAX_USE_CASES,
    NOT_CROWDED_MAX,
    QUIET_NOISE_MAX,
    SCORE_TIER_GOOD,
    SCORE_TIER_GREAT,
    STRONG_REVIEWS_MIN_COUNT,
)
from workscore.models.model_report import BestTime, ScoreTier
from workscore.models.model_score import (
    CrowdForecastPoint,
    CrowdLevel,
    MomentumSignal,
    MomentumTrend,
    ScoreBreakdown,
)
from workscore.models.model_signals import ExternalProviderRecord, RawCheckinMetric


def _mean(values: list[float]) -> float | None:
    return statistics.fmean(values) if values else None


class CheckinAverages:
    """Averages of the raw check-in fields on their reported scales."""

    def __init__(self, checkins: Sequence[RawCheckinMetric]) -> None:
        self.wifi = _mean([c.wifi_speed for c in checkins if c.wifi_speed is not None])
        self.noise = _mean([c.noise_level for c in checkins if c.noise_level is not None])
        self.busyness = _mean([c.busyness for c in checkins if c.busyness is not None])

        laptop_votes = [c.laptop_friendly for c in checkins if c.laptop_friendly is not None]
        self.laptop_pct = (
            sum(laptop_votes) / len(laptop_votes) * 100.0 if laptop_votes else None
        )


def derive_crowd_level(average_busyness: float | None) -> CrowdLevel:
    """Bucket mean check-in busyness (1-5) into a crowd level."""
    if average_busyness is None:
        return CrowdLevel.UNKNOWN
    if average_busyness <= CROWD_LEVEL_LOW_MAX:
        return CrowdLevel.LOW
    if average_busyness >= CROWD_LEVEL_HIGH_MIN:
        return CrowdLevel.HIGH
    return CrowdLevel.MODERATE


def _bucket_hour(hour: int) -> BestTime:
    if 6 <= hour < 12:
        return BestTime.MORNING
    if 12 <= hour < 17:
        return BestTime.AFTERNOON
    if 17 <= hour < 22:
        return BestTime.EVENING
    return BestTime.LATE


def derive_best_time(checkins: Sequence[RawCheckinMetric]) -> BestTime:
    """Part of the day with the most check-ins; earlier buckets win ties."""
    counts = {
        BestTime.MORNING: 0,
        BestTime.AFTERNOON: 0,
        BestTime.EVENING: 0,
        BestTime.LATE: 0,
    }
    for checkin in checkins:
        counts[_bucket_hour(checkin.timestamp.hour)] += 1

    best, count = max(counts.items(), key=lambda item: item[1])
    return best if count else BestTime.ANYTIME


def score_tier(work_score: int | None) -> ScoreTier:
    if work_score is None:
        return ScoreTier.UNRATED
    if work_score >= SCORE_TIER_GREAT:
        return ScoreTier.GREAT
    if work_score >= SCORE_TIER_GOOD:
        return ScoreTier.GOOD
    return ScoreTier.FAIR


def derive_highlights(
    averages: CheckinAverages,
    breakdown: ScoreBreakdown,
    providers: Sequence[ExternalProviderRecord],
    forecast: Sequence[CrowdForecastPoint] = (),
    momentum: MomentumSignal | None = None,
) -> list[str]:
    highlights = []
    if averages.wifi is not None and averages.wifi >= FAST_WIFI_MIN:
        highlights.append("Fast WiFi")
    if averages.laptop_pct is not None and averages.laptop_pct >= LAPTOP_FRIENDLY_PCT_MIN:
        highlights.append("Laptop friendly")
    if averages.busyness is not None and averages.busyness <= NOT_CROWDED_MAX:
        highlights.append("Usually not crowded")
    if averages.noise is not None and averages.noise <= QUIET_NOISE_MAX:
        highlights.append("Typically quiet")
    if forecast and forecast[0].level == CrowdLevel.LOW:
        highlights.append("Low crowd now")
    if any(p.review_count >= STRONG_REVIEWS_MIN_COUNT for p in providers):
        highlights.append("Strong external reviews")
    if breakdown.is_open is True:
        highlights.append("Open now")
    if momentum is not None and momentum.trend == MomentumTrend.RISING:
        highlights.append("Trending up")
    return highlights[:MAX_HIGHLIGHTS]


def derive_use_cases(
    averages: CheckinAverages,
    breakdown: ScoreBreakdown,
    providers: Sequence[ExternalProviderRecord],
    crowd_level: CrowdLevel,
    best_time: BestTime,
) -> list[str]:
    use_cases = []
    if breakdown.work_score is not None and breakdown.work_score >= SCORE_TIER_GREAT:
        use_cases.append("Deep work")
    if (
        averages.wifi is not None
        and averages.wifi >= LAPTOP_SESSION_WIFI_MIN
        and averages.laptop_pct is not None
        and averages.laptop_pct >= LAPTOP_SESSION_PCT_MIN
    ):
        use_cases.append("Laptop sessions")
    if crowd_level == CrowdLevel.MODERATE:
        use_cases.append("Group study")
    if crowd_level == CrowdLevel.HIGH:
        use_cases.append("Social energy")

    rating = _mean([p.rating for p in providers if p.rating is not None])
    if rating is not None and rating >= COFFEE_MEETUP_RATING_MIN:
        use_cases.append("Coffee meetups")
    if best_time == BestTime.LATE:
        use_cases.append("Late sessions")

    if not use_cases:
        use_cases.append("Quick focus stop")
    return use_cases[:MAX_USE_CASES]
