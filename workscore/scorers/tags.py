"""Community tag scorer."""

from collections import Counter

from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import FactorName, FactorScore, SourceTag
from workscore.scorers.base import latest_observed_at
from workscore.scorers.reliability import ReliabilityModel, population_variance, weighted_mean
from workscore.signals.normalizer import SignalBag


class TagScorer:
    """Frequency-weighted mean of tag scores.

    Every mention counts once and is weighted by its tag's importance, so a
    spot tagged "wifi" ten times and "loud" once leans heavily on wifi. The
    sample size is the number of check-ins carrying at least one known tag.
    """

    factor = FactorName.TAGS

    def __init__(self, reliability: ReliabilityModel) -> None:
        self.reliability = reliability

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        mentions = bag.for_factor(self.factor, SourceTag.LIVE)
        if not mentions:
            return None

        tagged = max(bag.tagged_checkin_count, 1)
        weight = self.reliability.reliability(
            sample_size=tagged,
            coverage_ratio=min(1.0, tagged / max(bag.checkin_count, 1)),
            variance=population_variance([obs.value for obs in mentions]),
            external_trust=1.0,
            source_tag=SourceTag.LIVE,
        )

        counts = Counter(obs.label for obs in mentions)
        top = ", ".join(f"{tag} x{n}" for tag, n in counts.most_common(3))

        return FactorScore(
            factor=self.factor,
            value=weighted_mean(mentions),
            reliability=weight,
            source=SourceTag.LIVE,
            sample_size=tagged,
            last_observed_at=latest_observed_at(mentions),
            detail=top,
        )
