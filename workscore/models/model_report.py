"""Report model returned by the scoring engine for one spot."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from workscore.models.common import _utc_now
from workscore.models.model_score import (
    CrowdForecastPoint,
    CrowdLevel,
    MomentumSignal,
    ScoreBreakdown,
)


class BestTime(str, Enum):
    """Part of the day with the most check-in activity."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    LATE = "late"
    ANYTIME = "anytime"


class ScoreTier(str, Enum):
    """Display tier of a Work Score."""

    GREAT = "great"
    GOOD = "good"
    FAIR = "fair"
    UNRATED = "unrated"


class SpotReport(BaseModel):
    """Work Score, attribution, forecast and display insights for a spot."""

    model_config = ConfigDict(frozen=True)

    spot_id: str
    name: str = ""
    computed_at: datetime = Field(default_factory=_utc_now)
    breakdown: ScoreBreakdown
    tier: ScoreTier = ScoreTier.UNRATED
    forecast: list[CrowdForecastPoint] = Field(default_factory=list)
    weather_delta: float = 0.0
    momentum: MomentumSignal | None = None
    crowd_level: CrowdLevel = CrowdLevel.UNKNOWN
    best_time: BestTime = BestTime.ANYTIME
    highlights: list[str] = Field(default_factory=list)
    use_cases: list[str] = Field(default_factory=list)
    score_version: str = "1.0"
