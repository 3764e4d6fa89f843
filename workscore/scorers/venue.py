"""Venue type scorer: a laptop-friendliness prior from the kind of place."""

from collections import Counter

from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import FactorName, FactorScore, SourceTag
from workscore.scorers.base import latest_observed_at
from workscore.scorers.reliability import ReliabilityModel
from workscore.signals.normalizer import SignalBag
from workscore.signals.taxonomy import venue_prior


class VenueTypeScorer:
    """Categorical prior for spots without live laptop-friendliness data.

    Each source votes for one venue class. The majority class wins (ties go
    to the class voted first) and the share of agreeing votes acts as trust.
    Once check-ins report laptop-friendliness directly, the prior is dropped.
    """

    factor = FactorName.VENUE_TYPE

    def __init__(self, reliability: ReliabilityModel) -> None:
        self.reliability = reliability

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        votes = bag.for_factor(self.factor)
        if not votes:
            return None
        if bag.for_factor(FactorName.LAPTOP, SourceTag.LIVE):
            return None

        counts = Counter(obs.label for obs in votes)
        venue, agreeing = counts.most_common(1)[0]

        weight = self.reliability.reliability(
            sample_size=agreeing,
            coverage_ratio=1.0,
            variance=0.0,
            external_trust=agreeing / len(votes),
            source_tag=SourceTag.EXTERNAL,
            saturation_k=context.config.reliability.category_saturation_k,
        )

        return FactorScore(
            factor=self.factor,
            value=venue_prior(venue),
            reliability=weight,
            source=SourceTag.EXTERNAL,
            sample_size=agreeing,
            last_observed_at=latest_observed_at(votes),
            detail=venue,
        )
