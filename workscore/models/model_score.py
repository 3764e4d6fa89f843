from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FactorName(str, Enum):
    """The nine independently scored dimensions of a spot."""

    WIFI = "wifi"
    NOISE = "noise"
    CROWD = "crowd"
    LAPTOP = "laptop"
    TAGS = "tags"
    EXTERNAL_RATING = "external_rating"
    VENUE_TYPE = "venue_type"
    OPEN_STATUS = "open_status"
    MOMENTUM = "momentum"


# Canonical order used for breakdown attribution
FACTOR_ORDER = list(FactorName)


class SourceTag(str, Enum):
    """Where a factor's data came from."""

    LIVE = "live"
    INFERRED = "inferred"
    BLENDED = "blended"
    EXTERNAL = "external"


class ScoreStatus(str, Enum):
    """Outcome of a scoring call."""

    SCORED = "scored"
    INSUFFICIENT_DATA = "insufficient_data"


class MomentumTrend(str, Enum):
    """Direction of check-in activity between two consecutive windows."""

    RISING = "rising"
    FALLING = "falling"
    STEADY = "steady"


class CrowdLevel(str, Enum):
    """Coarse crowd buckets shown next to forecasts."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    UNKNOWN = "unknown"


class ForecastBasis(str, Enum):
    """How a forecast point was produced."""

    HISTORICAL_AVERAGE = "historical_average"
    WEATHER_ADJUSTED = "weather_adjusted"


class FactorObservation(BaseModel):
    """A single normalized observation for one factor.

    ``value`` is on a 0-100 scale. For the crowd factor it is the occupancy
    level (higher means busier); every other factor stores a value where
    higher is better for working.
    """

    model_config = ConfigDict(frozen=True)

    factor: FactorName
    value: float = Field(ge=0.0, le=100.0)
    source: SourceTag
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    weight: float = Field(default=1.0, ge=0.0, description="Relative weight within the factor")
    count: int = Field(default=1, ge=0, description="Underlying samples (e.g. review count)")
    observed_at: datetime | None = None
    label: str | None = Field(default=None, description="Categorical label, e.g. provider or tag")


class FactorScore(BaseModel):
    """Computed sub-score for one factor.

    ``weight`` and ``contribution`` are filled in by the aggregator; scorers
    leave them unset.
    """

    model_config = ConfigDict(frozen=True)

    factor: FactorName
    value: float = Field(ge=0.0, le=100.0, description="Sub-score 0-100")
    reliability: float = Field(ge=0.0, le=1.0, description="Reliability weight 0-1")
    source: SourceTag
    sample_size: int = Field(ge=0)
    last_observed_at: datetime | None = None
    gating: bool = Field(default=False, description="Shown for display, never averaged")
    detail: str | None = Field(default=None, description="Short human-readable note")
    weight: float | None = Field(default=None, ge=0.0, le=1.0)
    contribution: float | None = Field(default=None, ge=0.0, le=100.0)


class ScoreAnalysis(BaseModel):
    """Which factor drives the score."""

    model_config = ConfigDict(frozen=True)

    dominant_factor: FactorName | None = Field(
        default=None, description="None when the score is balanced"
    )
    dominance_ratio: float = Field(default=1.0, ge=0.0)


class ScoreBreakdown(BaseModel):
    """Aggregation output: Work Score plus per-factor attribution."""

    model_config = ConfigDict(frozen=True)

    status: ScoreStatus
    work_score: int | None = Field(default=None, ge=0, le=100)
    factors: list[FactorScore] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    stale: bool = False
    last_observed_at: datetime | None = None
    is_open: bool | None = None
    analysis: ScoreAnalysis = Field(default_factory=ScoreAnalysis)

    def factor(self, name: FactorName) -> FactorScore | None:
        """Return the entry for ``name`` or None if the factor is absent."""
        for entry in self.factors:
            if entry.factor == name:
                return entry
        return None


class MomentumSignal(BaseModel):
    """Comparison of two consecutive check-in windows."""

    model_config = ConfigDict(frozen=True)

    recent_count: int = Field(ge=0)
    prior_count: int = Field(ge=0)
    relative_change: float
    score: float = Field(ge=0.0, le=100.0)
    trend: MomentumTrend


class HourlyProfile(BaseModel):
    """Historical busyness average (0-100) for each clock hour."""

    model_config = ConfigDict(frozen=True)

    averages: tuple[float | None, ...] = Field(min_length=24, max_length=24)
    sample_counts: tuple[int, ...] = Field(
        default_factory=lambda: (0,) * 24, min_length=24, max_length=24
    )

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.averages)


class CrowdForecastPoint(BaseModel):
    """Predicted busyness for one hour ahead."""

    model_config = ConfigDict(frozen=True)

    offset_hours: int = Field(ge=0, le=6)
    hour: int = Field(ge=0, le=23)
    label: str
    local_hour_label: str
    busyness: float = Field(ge=0.0, le=100.0)
    level: CrowdLevel
    basis: ForecastBasis
