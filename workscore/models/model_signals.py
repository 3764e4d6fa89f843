"""Input record models handed to the engine by its collaborators.

Each source has its own record type, tagged by a ``kind`` literal so that a
mixed list of records can be validated as a discriminated union at the
normalizer boundary.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workscore.models.common import _require_aware

# Legacy check-in noise labels and their position on the 1-5 scale
NOISE_LABEL_LEVELS = {
    "silent": 1,
    "quiet": 2,
    "moderate": 3,
    "lively": 4,
    "loud": 4,
}


class NoiseLabel(str, Enum):
    """Noise labels produced by review inference."""

    QUIET = "quiet"
    MODERATE = "moderate"
    LOUD = "loud"


class ProviderName(str, Enum):
    """External rating providers."""

    GOOGLE = "google"
    YELP = "yelp"
    FOURSQUARE = "foursquare"


class WeatherCondition(str, Enum):
    """Coarse weather conditions supplied by the weather service."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    STORMY = "stormy"
    SNOWY = "snowy"
    COLD = "cold"
    HOT = "hot"


class RawCheckinMetric(BaseModel):
    """One user-submitted observation at a spot.

    Ordinal fields use a 1-5 scale. For noise and busyness, 1 means silent or
    empty and 5 means loud or packed.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["checkin"] = "checkin"
    spot_id: str = Field(min_length=1)
    timestamp: datetime = Field(description="When the check-in was submitted")
    wifi_speed: int | None = Field(default=None, ge=1, le=5)
    noise_level: int | None = Field(default=None, ge=1, le=5)
    busyness: int | None = Field(default=None, ge=1, le=5)
    laptop_friendly: bool | None = None
    tags: frozenset[str] = Field(default_factory=frozenset)
    price_level: int | None = Field(default=None, ge=1, le=4)

    @field_validator("noise_level", mode="before")
    @classmethod
    def map_noise_label(cls, value: object) -> object:
        """Accept the legacy string labels older check-ins were stored with."""
        if isinstance(value, str):
            level = NOISE_LABEL_LEVELS.get(value.strip().lower())
            if level is None:
                msg = f"Unknown noise label '{value}'"
                raise ValueError(msg)
            return level
        return value

    @field_validator("timestamp")
    @classmethod
    def timestamp_is_aware(cls, value: datetime) -> datetime:
        return _require_aware(value)


class InferredReviewSignal(BaseModel):
    """NLP-derived signals extracted from review text for a spot.

    Each inferred value carries its own confidence in [0, 1].
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["inferred"] = "inferred"
    spot_id: str = Field(min_length=1)
    has_wifi: bool | None = None
    wifi_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    inferred_noise: NoiseLabel | None = None
    noise_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    good_for_studying: bool | None = None
    studying_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    review_count: int = Field(default=0, ge=0, description="Reviews analyzed")
    analyzed_at: datetime | None = None

    @field_validator("analyzed_at")
    @classmethod
    def analyzed_at_is_aware(cls, value: datetime | None) -> datetime | None:
        return _require_aware(value)


class ExternalProviderRecord(BaseModel):
    """Rating data from one external provider, already normalized upstream."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["provider"] = "provider"
    spot_id: str = Field(min_length=1)
    provider: ProviderName
    rating: float | None = Field(default=None, ge=1.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    price_level: int | None = Field(default=None, ge=1, le=4)
    categories: tuple[str, ...] = Field(default_factory=tuple)
    is_open: bool | None = None
    fetched_at: datetime | None = None

    @field_validator("fetched_at")
    @classmethod
    def fetched_at_is_aware(cls, value: datetime | None) -> datetime | None:
        return _require_aware(value)


SourceRecord = Annotated[
    RawCheckinMetric | InferredReviewSignal | ExternalProviderRecord,
    Field(discriminator="kind"),
]


class WeatherSignal(BaseModel):
    """Weather at the spot's location for the time being scored."""

    model_config = ConfigDict(frozen=True)

    condition: WeatherCondition
    precipitation_mm: float | None = Field(
        default=None, ge=0.0, description="Precipitation intensity in mm/hour"
    )
    precipitation_probability: float | None = Field(default=None, ge=0.0, le=1.0)


class SpotInputs(BaseModel):
    """Everything the caller has fetched for one spot."""

    model_config = ConfigDict(frozen=True)

    spot_id: str = Field(min_length=1)
    name: str = ""
    checkins: tuple[RawCheckinMetric, ...] = Field(default_factory=tuple)
    inferred: tuple[InferredReviewSignal, ...] = Field(default_factory=tuple)
    providers: tuple[ExternalProviderRecord, ...] = Field(default_factory=tuple)
    weather: WeatherSignal | None = None
    venue_types: tuple[str, ...] = Field(
        default_factory=tuple, description="Raw place types, e.g. 'library', 'cafe'"
    )
    hourly_history: tuple[float | None, ...] | None = Field(
        default=None, description="Precomputed busyness averages (0-100) per clock hour"
    )

    @field_validator("hourly_history")
    @classmethod
    def history_covers_day(
        cls, value: tuple[float | None, ...] | None
    ) -> tuple[float | None, ...] | None:
        if value is None:
            return value
        if len(value) != 24:
            msg = f"hourly_history must have 24 entries, got {len(value)}"
            raise ValueError(msg)
        for entry in value:
            if entry is not None and not 0.0 <= entry <= 100.0:
                msg = f"hourly_history entries must be within [0, 100], got {entry}"
                raise ValueError(msg)
        return value
