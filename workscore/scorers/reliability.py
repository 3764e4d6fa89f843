"""Reliability model: how much each factor's sub-score can be trusted."""

import math
import statistics

from workscore.consts import MAX_RATING_SPREAD, MAX_VARIANCE
from workscore.exceptions import ScoringInputError
from workscore.models.model_eval import ReliabilityConfig
from workscore.models.model_score import FactorObservation, SourceTag


class ReliabilityModel:
    """Computes a reliability weight in [0, 1] for a factor.

    Terms, applied in this order:
        sample    = n / (n + k)          (k depends on the kind of sample)
        coverage  = floor + (1 - floor) * coverage_ratio
        variance  = 1 - max_penalty * min(1, variance / 2500)
        external  = external_trust       (external sources only)
        raw       = raw_confidence       (e.g. NLP confidence)
        dampening = 0.6                  (inferred sources only, always last)

    Dampening is the only place the inferred-data discount is applied, so an
    inferred factor can never reach more than 0.6x the weight of an
    equivalent live factor.
    """

    def __init__(self, config: ReliabilityConfig | None = None) -> None:
        self.config = config or ReliabilityConfig()

    def reliability(
        self,
        sample_size: int,
        coverage_ratio: float,
        variance: float,
        external_trust: float,
        source_tag: SourceTag,
        raw_confidence: float = 1.0,
        saturation_k: float | None = None,
    ) -> float:
        """Calculate the reliability weight of one factor.

        Args:
            sample_size: Number of observations (or reviews for external data)
            coverage_ratio: Share of records that reported this factor (0-1)
            variance: Variance of the observations on the 0-100 scale
            external_trust: Provider diversity x rating consensus (0-1)
            source_tag: Source of the data; BLENDED is not accepted here
            raw_confidence: Confidence attached to the data itself (0-1)
            saturation_k: Override for k, e.g. for categorical votes

        Returns:
            Reliability weight between 0-1

        Raises:
            ScoringInputError: If any argument is out of range
        """
        self._validate(sample_size, coverage_ratio, variance, external_trust, raw_confidence)
        if source_tag == SourceTag.BLENDED:
            raise ScoringInputError("blended factors carry their live reliability")

        if saturation_k is not None:
            k = saturation_k
        elif source_tag == SourceTag.EXTERNAL:
            k = self.config.review_saturation_k
        else:
            k = self.config.checkin_saturation_k
        weight = sample_size / (sample_size + k)

        floor = self.config.coverage_floor
        weight *= floor + (1.0 - floor) * coverage_ratio

        weight *= 1.0 - self.config.max_variance_penalty * min(1.0, variance / MAX_VARIANCE)

        if source_tag == SourceTag.EXTERNAL:
            weight *= external_trust

        weight *= raw_confidence

        # Must stay last so saturation cannot swallow the discount
        if source_tag == SourceTag.INFERRED:
            weight *= self.config.dampening_factor

        return min(1.0, max(0.0, weight))

    def _validate(
        self,
        sample_size: int,
        coverage_ratio: float,
        variance: float,
        external_trust: float,
        raw_confidence: float,
    ) -> None:
        if sample_size < 0:
            msg = f"sample_size must be >= 0, got {sample_size}"
            raise ScoringInputError(msg)
        if not 0.0 <= coverage_ratio <= 1.0:
            msg = f"coverage_ratio must be within [0, 1], got {coverage_ratio}"
            raise ScoringInputError(msg)
        if variance < 0 or math.isnan(variance):
            msg = f"variance must be >= 0, got {variance}"
            raise ScoringInputError(msg)
        if not 0.0 <= external_trust <= 1.0:
            msg = f"external_trust must be within [0, 1], got {external_trust}"
            raise ScoringInputError(msg)
        if not 0.0 <= raw_confidence <= 1.0:
            msg = f"raw_confidence must be within [0, 1], got {raw_confidence}"
            raise ScoringInputError(msg)


def weighted_mean(observations: list[FactorObservation]) -> float:
    """Mean of observation values weighted by each observation's weight."""
    total_weight = sum(obs.weight for obs in observations)
    if total_weight == 0:
        return statistics.fmean(obs.value for obs in observations)
    return sum(obs.value * obs.weight for obs in observations) / total_weight


def population_variance(values: list[float]) -> float:
    """Population variance; 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return statistics.pvariance(values)


def external_trust(ratings: list[float]) -> float:
    """Trust in provider ratings from diversity and consensus.

    More independent providers raise diversity (1 -> 0.5, 2 -> 0.75,
    3 -> 0.875). A lower spread between their ratings (1-5 scale) raises
    consensus; a single provider has full consensus.

    Args:
        ratings: One rating per provider on the 1-5 scale

    Returns:
        Trust between 0-1; 0.0 when there are no ratings
    """
    if not ratings:
        return 0.0
    diversity = 1.0 - 0.5 ** len(ratings)
    spread = statistics.pstdev(ratings) if len(ratings) > 1 else 0.0
    consensus = 1.0 - min(1.0, spread / MAX_RATING_SPREAD)
    return diversity * consensus
