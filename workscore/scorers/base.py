"""Base scorer protocol defining the contract for all factor scorers."""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import FactorName, FactorObservation, FactorScore
from workscore.signals.normalizer import SignalBag


class BaseFactorScorer(Protocol):
    """Protocol defining the factor scorer contract.

    Scorers are pure functions that take a SignalBag and ScoreContext and
    return a FactorScore, or None when the factor has no observations at all.
    None means "absent": the aggregator redistributes the factor's weight
    instead of defaulting it to a neutral value.
    """

    factor: FactorName

    def score(self, bag: SignalBag, context: ScoreContext) -> FactorScore | None:
        """Score one factor of a spot.

        Args:
            bag: Normalized observations for the spot
            context: Scoring context with the clock, weather delta and config

        Returns:
            FactorScore with a 0-100 value and reliability, or None if absent
        """
        ...


def latest_observed_at(observations: Iterable[FactorObservation]) -> datetime | None:
    """Most recent timestamp among dated observations."""
    dated = [obs.observed_at for obs in observations if obs.observed_at is not None]
    return max(dated) if dated else None
