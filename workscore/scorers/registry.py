"""Scorer registry for orchestrating all factor scorers."""

import logging

from workscore.context.weather import WeatherAdjuster
from workscore.models.model_eval import ScoreContext
from workscore.models.model_score import FactorName, FactorScore, ScoreBreakdown
from workscore.scorers.base import BaseFactorScorer
from workscore.scorers.composite import aggregate
from workscore.scorers.external import ExternalRatingScorer
from workscore.scorers.metrics import CrowdScorer, MetricScorer
from workscore.scorers.momentum import MomentumScorer
from workscore.scorers.open_status import OpenStatusScorer
from workscore.scorers.reliability import ReliabilityModel
from workscore.scorers.tags import TagScorer
from workscore.scorers.venue import VenueTypeScorer
from workscore.signals.normalizer import SignalBag

logger = logging.getLogger(__name__)


class FactorScorerRegistry:
    """Orchestrates all factor scorers for a spot.

    This registry manages the nine factor scorers and provides a unified
    interface for scoring a normalized spot. It handles:
    - Running every scorer against the same SignalBag
    - Dropping absent factors
    - Aggregating the rest into a ScoreBreakdown
    """

    def __init__(
        self,
        reliability: ReliabilityModel | None = None,
        adjuster: WeatherAdjuster | None = None,
    ) -> None:
        """Initialize registry with all scorers sharing one reliability model."""
        self.reliability = reliability or ReliabilityModel()
        self.scorers: dict[FactorName, BaseFactorScorer] = {
            FactorName.WIFI: MetricScorer(FactorName.WIFI, self.reliability),
            FactorName.NOISE: MetricScorer(FactorName.NOISE, self.reliability),
            FactorName.CROWD: CrowdScorer(self.reliability, adjuster),
            FactorName.LAPTOP: MetricScorer(FactorName.LAPTOP, self.reliability),
            FactorName.TAGS: TagScorer(self.reliability),
            FactorName.EXTERNAL_RATING: ExternalRatingScorer(self.reliability),
            FactorName.VENUE_TYPE: VenueTypeScorer(self.reliability),
            FactorName.OPEN_STATUS: OpenStatusScorer(),
            FactorName.MOMENTUM: MomentumScorer(self.reliability),
        }

    def score_factors(self, bag: SignalBag, context: ScoreContext) -> list[FactorScore]:
        """Run every scorer and keep the factors that are present.

        Args:
            bag: Normalized observations for one spot
            context: Scoring context with clock, weather delta and config

        Returns:
            Present factor scores in canonical factor order
        """
        scores = []
        for name, scorer in self.scorers.items():
            result = scorer.score(bag, context)
            if result is None:
                logger.debug(f"{bag.spot_id}: {name.value} absent")
                continue
            logger.debug(
                f"{bag.spot_id}: {name.value}={result.value:.1f} "
                f"(reliability {result.reliability:.2f}, {result.source.value})"
            )
            scores.append(result)
        return scores

    def score_spot(self, bag: SignalBag, context: ScoreContext) -> ScoreBreakdown:
        """Score all factors and aggregate them into a breakdown."""
        return aggregate(
            self.score_factors(bag, context),
            weights=context.config.weights,
            now=context.now,
            staleness_threshold=context.config.staleness_threshold,
        )
