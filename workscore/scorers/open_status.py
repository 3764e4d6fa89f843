"""Open status: a display gate, never part of the Work Score."""

from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import FactorName, FactorScore, SourceTag
from workscore.scorers.base import latest_observed_at
from workscore.signals.normalizer import SignalBag


class OpenStatusScorer:
    """Majority vote of provider ``is_open`` flags; ties count as open.

    Closed spots are flagged, not penalized: the factor is always gating
    with zero reliability, so the aggregator never averages it.
    """

    factor = FactorName.OPEN_STATUS

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        votes = bag.for_factor(self.factor)
        if not votes:
            return None

        open_votes = sum(1 for obs in votes if obs.value > 0)
        is_open = open_votes * 2 >= len(votes)

        return FactorScore(
            factor=self.factor,
            value=100.0 if is_open else 0.0,
            reliability=0.0,
            source=SourceTag.EXTERNAL,
            sample_size=len(votes),
            last_observed_at=latest_observed_at(votes),
            gating=True,
            detail="open" if is_open else "closed",
        )
