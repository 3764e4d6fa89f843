"""Pydantic models for the Work Score engine."""

from workscore.models.model_eval import (
    EngineConfig,
    FactorWeights,
    ReliabilityConfig,
    ScoreContext,
)
from workscore.models.model_report import (
    BestTime,
    ScoreTier,
    SpotReport,
)
from workscore.models.model_score import (
    FACTOR_ORDER,
    CrowdForecastPoint,
    CrowdLevel,
    FactorName,
    FactorObservation,
    FactorScore,
    ForecastBasis,
    HourlyProfile,
    MomentumSignal,
    MomentumTrend,
    ScoreAnalysis,
    ScoreBreakdown,
    ScoreStatus,
    SourceTag,
)
from workscore.models.model_signals import (
    ExternalProviderRecord,
    InferredReviewSignal,
    NoiseLabel,
    ProviderName,
    RawCheckinMetric,
    SourceRecord,
    SpotInputs,
    WeatherCondition,
    WeatherSignal,
)

__all__ = [
    # Input records
    "ExternalProviderRecord",
    "InferredReviewSignal",
    "NoiseLabel",
    "ProviderName",
    "RawCheckinMetric",
    "SourceRecord",
    "SpotInputs",
    "WeatherCondition",
    "WeatherSignal",
    # Score models
    "FACTOR_ORDER",
    "CrowdForecastPoint",
    "CrowdLevel",
    "FactorName",
    "FactorObservation",
    "FactorScore",
    "ForecastBasis",
    "HourlyProfile",
    "MomentumSignal",
    "MomentumTrend",
    "ScoreAnalysis",
    "ScoreBreakdown",
    "ScoreStatus",
    "SourceTag",
    # Configuration models
    "EngineConfig",
    "FactorWeights",
    "ReliabilityConfig",
    "ScoreContext",
    # Report models
    "BestTime",
    "ScoreTier",
    "SpotReport",
]
