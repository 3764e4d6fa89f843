"""External provider rating scorer."""

import logging

from workscore.consts import ORDINAL_MAX, ORDINAL_MIN
from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import FactorName, FactorScore, SourceTag
from workscore.scorers.base import latest_observed_at
from workscore.scorers.reliability import ReliabilityModel, external_trust, weighted_mean
from workscore.signals.normalizer import SignalBag

logger = logging.getLogger(__name__)


def to_star_rating(value: float) -> float:
    """Map a 0-100 sub-score back onto the 1-5 star scale."""
    return ORDINAL_MIN + value / 100.0 * (ORDINAL_MAX - ORDINAL_MIN)


class ExternalRatingScorer:
    """Provider-weighted consensus of external ratings.

    Google counts 50%, Yelp 30% and Foursquare 20%; weights are renormalized
    over the providers that returned a rating. Reliability saturates on the
    combined review count and is scaled by external trust (provider
    diversity x rating consensus). Rating spread is priced into consensus,
    so no separate variance penalty applies.
    """

    factor = FactorName.EXTERNAL_RATING

    def __init__(self, reliability: ReliabilityModel) -> None:
        self.reliability = reliability

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        ratings = bag.for_factor(self.factor, SourceTag.EXTERNAL)
        if not ratings:
            return None

        stars = [to_star_rating(obs.value) for obs in ratings]
        trust = external_trust(stars)
        review_count = sum(obs.count for obs in ratings)

        weight = self.reliability.reliability(
            sample_size=review_count,
            coverage_ratio=min(1.0, len(ratings) / max(bag.provider_count, 1)),
            variance=0.0,
            external_trust=trust,
            source_tag=SourceTag.EXTERNAL,
        )
        logger.debug(
            f"{bag.spot_id}: {len(ratings)} provider ratings, {review_count} reviews, "
            f"trust {trust:.2f}"
        )

        detail = ", ".join(f"{obs.label} {star:.1f}" for obs, star in zip(ratings, stars))
        return FactorScore(
            factor=self.factor,
            value=weighted_mean(ratings),
            reliability=weight,
            source=SourceTag.EXTERNAL,
            sample_size=review_count,
            last_observed_at=latest_observed_at(ratings),
            detail=detail,
        )
