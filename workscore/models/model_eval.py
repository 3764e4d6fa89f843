"""Configuration models for scoring spots."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, model_validator

from workscore.consts import (
    CATEGORY_SATURATION_K,
    CHECKIN_SATURATION_K,
    COVERAGE_FLOOR,
    DAMPENING_FACTOR,
    MAX_VARIANCE_PENALTY,
    MOMENTUM_MIN_CHECKINS,
    REVIEW_SATURATION_K,
    STALENESS_THRESHOLD,
)
from workscore.models.model_score import FactorName


class FactorWeights(BaseModel):
    """Base weight of each averaged factor before reliability adjustment.

    Open status gates display only and has no weight. All weights must sum
    to 1.0.
    """

    model_config = ConfigDict(frozen=True)

    wifi: float = Field(default=0.22, ge=0.0, le=1.0)
    noise: float = Field(default=0.17, ge=0.0, le=1.0)
    crowd: float = Field(default=0.15, ge=0.0, le=1.0)
    laptop: float = Field(default=0.14, ge=0.0, le=1.0)
    tags: float = Field(default=0.08, ge=0.0, le=1.0)
    external_rating: float = Field(default=0.10, ge=0.0, le=1.0)
    venue_type: float = Field(default=0.06, ge=0.0, le=1.0)
    momentum: float = Field(default=0.08, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "FactorWeights":
        """Validate that weights sum to 1.0."""
        total = sum(self.as_dict().values())
        if abs(total - 1.0) > 0.001:
            msg = f"Weights must sum to 1.0, got {total}"
            raise ValueError(msg)
        return self

    def as_dict(self) -> dict[FactorName, float]:
        return {FactorName(name): value for name, value in self.model_dump().items()}

    def for_factor(self, factor: FactorName) -> float:
        """Base weight for ``factor``; 0.0 for factors that are never averaged."""
        return self.as_dict().get(factor, 0.0)


class ReliabilityConfig(BaseModel):
    """Tunables of the reliability model."""

    model_config = ConfigDict(frozen=True)

    checkin_saturation_k: float = Field(default=CHECKIN_SATURATION_K, gt=0.0)
    review_saturation_k: float = Field(default=REVIEW_SATURATION_K, gt=0.0)
    category_saturation_k: float = Field(default=CATEGORY_SATURATION_K, gt=0.0)
    coverage_floor: float = Field(default=COVERAGE_FLOOR, ge=0.0, le=1.0)
    max_variance_penalty: float = Field(default=MAX_VARIANCE_PENALTY, ge=0.0, le=1.0)
    dampening_factor: float = Field(default=DAMPENING_FACTOR, ge=0.0, le=1.0)


class EngineConfig(BaseModel):
    """Configuration handed to every scoring call.

    The engine is pure: all tunables come through this object and nothing is
    read from the environment.
    """

    model_config = ConfigDict(frozen=True)

    weights: FactorWeights = Field(default_factory=FactorWeights)
    reliability: ReliabilityConfig = Field(default_factory=ReliabilityConfig)
    staleness_threshold: timedelta = Field(default=STALENESS_THRESHOLD)
    momentum_min_checkins: int = Field(default=MOMENTUM_MIN_CHECKINS, ge=1)

    # Score versioning
    score_version: str = Field(default="1.0", description="Bumped when weights or formulas change")


class ScoreContext(BaseModel):
    """Per-call context for stateless factor scorers.

    Scorers are pure functions. Everything that varies between calls comes
    through this context; nothing is read from the clock or the network.
    """

    model_config = ConfigDict(frozen=True)

    now: datetime
    weather_delta: float = Field(default=0.0, description="Busyness delta from weather")
    config: EngineConfig = Field(default_factory=EngineConfig)
