"""Scorers module for rating work spots across nine factors.

Each factor is scored independently from a normalized SignalBag:
- Metrics reported by check-ins (wifi, noise, crowd, laptop)
- Community tags and venue type priors
- External provider ratings and open status
- Momentum of check-in volume

All scorers are stateless pure functions that take SignalBag + ScoreContext
and return a FactorScore, or None when the factor is absent.
"""

from workscore.scorers.base import BaseFactorScorer
from workscore.scorers.composite import aggregate, analyze_factor_dominance
from workscore.scorers.external import ExternalRatingScorer
from workscore.scorers.metrics import CrowdScorer, MetricScorer
from workscore.scorers.momentum import MomentumDetector, MomentumScorer
from workscore.scorers.open_status import OpenStatusScorer
from workscore.scorers.registry import FactorScorerRegistry
from workscore.scorers.reliability import ReliabilityModel, external_trust
from workscore.scorers.tags import TagScorer
from workscore.scorers.venue import VenueTypeScorer

__all__ = [
    # Contract
    "BaseFactorScorer",
    # Scorers
    "CrowdScorer",
    "ExternalRatingScorer",
    "MetricScorer",
    "MomentumDetector",
    "MomentumScorer",
    "OpenStatusScorer",
    "TagScorer",
    "VenueTypeScorer",
    # Reliability
    "ReliabilityModel",
    "external_trust",
    # Aggregation
    "FactorScorerRegistry",
    "aggregate",
    "analyze_factor_dominance",
]
