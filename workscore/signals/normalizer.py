"""Signal normalizer: heterogeneous source records -> per-factor observations.

This is the validation boundary of the engine. Records may arrive as model
instances or as plain dicts; dicts are validated here so that scorers never
have to deal with maybe-present fields. Missing values are dropped, never
zero-filled, and a factor with no observations simply has no entry.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from workscore.consts import (
    INFERRED_NEGATIVE_SCORE,
    INFERRED_POSITIVE_SCORE,
    ORDINAL_MAX,
    ORDINAL_MIN,
    PROVIDER_WEIGHTS,
)
from workscore.exceptions import ScoringInputError
from workscore.models.model_score import FactorName, FactorObservation, SourceTag
from workscore.models.model_signals import (
    NOISE_LABEL_LEVELS,
    ExternalProviderRecord,
    InferredReviewSignal,
    RawCheckinMetric,
    SourceRecord,
    SpotInputs,
)
from workscore.signals.taxonomy import (
    TAG_SCORES,
    classify_venue,
    normalize_tag,
    tag_importance,
    venue_prior,
)

logger = logging.getLogger(__name__)

_SOURCE_RECORD_ADAPTER: TypeAdapter[Any] = TypeAdapter(SourceRecord)

_EPOCH = datetime.min.replace(tzinfo=UTC)


def rescale_ordinal(value: int | float) -> float:
    """Linearly rescale a 1-5 ordinal onto 0-100."""
    return (value - ORDINAL_MIN) / (ORDINAL_MAX - ORDINAL_MIN) * 100.0


def invert_ordinal(value: int | float) -> float:
    """Rescale a 1-5 ordinal where 1 is best (silent, empty) onto 0-100."""
    return 100.0 - rescale_ordinal(value)


class SignalBag(BaseModel):
    """Normalized observations for one spot, grouped by factor."""

    model_config = ConfigDict(frozen=True)

    spot_id: str
    observations: dict[FactorName, tuple[FactorObservation, ...]] = Field(default_factory=dict)
    checkin_count: int = Field(default=0, ge=0)
    tagged_checkin_count: int = Field(default=0, ge=0, description="Check-ins with a known tag")
    checkin_times: tuple[datetime, ...] = Field(default_factory=tuple)
    provider_count: int = Field(default=0, ge=0)
    price_level: int | None = None

    def for_factor(
        self, factor: FactorName, source: SourceTag | None = None
    ) -> list[FactorObservation]:
        """Observations of ``factor``, optionally restricted to one source."""
        found = self.observations.get(factor, ())
        if source is None:
            return list(found)
        return [obs for obs in found if obs.source == source]

    def has(self, factor: FactorName) -> bool:
        return bool(self.observations.get(factor))

    @property
    def is_empty(self) -> bool:
        return not any(self.observations.values())

    @property
    def last_checkin_at(self) -> datetime | None:
        return max(self.checkin_times) if self.checkin_times else None


def _coerce(record: object, model: type[BaseModel]) -> Any:
    """Return ``record`` as an instance of ``model``, validating dicts."""
    if isinstance(record, model):
        return record
    if isinstance(record, Mapping):
        # pydantic.ValidationError propagates: malformed input fails fast
        return model.model_validate(record)
    msg = f"Expected {model.__name__} or mapping, got {type(record).__name__}"
    raise ScoringInputError(msg)


class SignalNormalizer:
    """Converts raw records for one spot into a SignalBag.

    Ordinal 1-5 scales are rescaled linearly onto 0-100. Noise is inverted so
    that quieter is better. Busyness keeps its occupancy direction (higher is
    busier) so the weather adjustment can be applied before the crowd scorer
    inverts it.
    """

    def normalize(
        self,
        checkins: Iterable[RawCheckinMetric | Mapping[str, Any]] = (),
        inferred: Iterable[InferredReviewSignal | Mapping[str, Any]] = (),
        providers: Iterable[ExternalProviderRecord | Mapping[str, Any]] = (),
        venue_types: Iterable[str] = (),
        spot_id: str | None = None,
    ) -> SignalBag:
        """Normalize all records for a single spot.

        Args:
            checkins: Check-in records within the caller's query window
            inferred: Review inference results (the most recent one is used)
            providers: At most one record per external provider
            venue_types: Raw place types supplied alongside the spot
            spot_id: Expected spot id; defaults to the first record's id

        Returns:
            SignalBag with observations grouped by factor

        Raises:
            ScoringInputError: If records belong to different spots or a
                provider appears twice
            pydantic.ValidationError: If a record fails field validation
        """
        checkin_records = [_coerce(c, RawCheckinMetric) for c in checkins]
        inferred_records = [_coerce(s, InferredReviewSignal) for s in inferred]
        provider_records = [_coerce(p, ExternalProviderRecord) for p in providers]

        all_records: list[RawCheckinMetric | InferredReviewSignal | ExternalProviderRecord] = [
            *checkin_records,
            *inferred_records,
            *provider_records,
        ]
        expected_id = spot_id or (all_records[0].spot_id if all_records else "")
        for record in all_records:
            if record.spot_id != expected_id:
                msg = (
                    f"Record for spot '{record.spot_id}' passed while "
                    f"normalizing spot '{expected_id}'"
                )
                raise ScoringInputError(msg)

        grouped: dict[FactorName, list[FactorObservation]] = {}

        def add(observation: FactorObservation) -> None:
            grouped.setdefault(observation.factor, []).append(observation)

        for checkin in checkin_records:
            for observation in self._from_checkin(checkin):
                add(observation)

        latest_inferred = self._latest_inferred(inferred_records)
        if latest_inferred is not None:
            for observation in self._from_inferred(latest_inferred):
                add(observation)

        seen_providers = set()
        for record in provider_records:
            if record.provider in seen_providers:
                msg = f"Duplicate {record.provider.value} record for spot '{expected_id}'"
                raise ScoringInputError(msg)
            seen_providers.add(record.provider)
            for observation in self._from_provider(record):
                add(observation)

        for observation in self._from_venue_types(venue_types):
            add(observation)

        self._drop_unclassified_venues(grouped)

        bag = SignalBag(
            spot_id=expected_id,
            observations={factor: tuple(obs) for factor, obs in grouped.items()},
            checkin_count=len(checkin_records),
            tagged_checkin_count=sum(
                1 for c in checkin_records if any(normalize_tag(t) for t in c.tags)
            ),
            checkin_times=tuple(sorted(c.timestamp for c in checkin_records)),
            provider_count=len(provider_records),
            price_level=self._consensus_price(checkin_records, provider_records),
        )

        logger.debug(
            f"Normalized spot {expected_id}: {bag.checkin_count} check-ins, "
            f"{len(inferred_records)} inferred, {bag.provider_count} providers -> "
            f"{sorted(f.value for f in bag.observations)}"
        )
        return bag

    def normalize_inputs(self, inputs: SpotInputs) -> SignalBag:
        """Normalize a SpotInputs bundle."""
        return self.normalize(
            checkins=inputs.checkins,
            inferred=inputs.inferred,
            providers=inputs.providers,
            venue_types=inputs.venue_types,
            spot_id=inputs.spot_id,
        )

    def normalize_records(
        self, records: Iterable[SourceRecord | Mapping[str, Any]], spot_id: str | None = None
    ) -> SignalBag:
        """Normalize a mixed list of records tagged by their ``kind`` field."""
        checkins: list[RawCheckinMetric] = []
        inferred: list[InferredReviewSignal] = []
        providers: list[ExternalProviderRecord] = []

        for raw in records:
            record = raw if isinstance(raw, BaseModel) else _SOURCE_RECORD_ADAPTER.validate_python(raw)
            if isinstance(record, RawCheckinMetric):
                checkins.append(record)
            elif isinstance(record, InferredReviewSignal):
                inferred.append(record)
            elif isinstance(record, ExternalProviderRecord):
                providers.append(record)
            else:
                msg = f"Unsupported record type {type(record).__name__}"
                raise ScoringInputError(msg)

        return self.normalize(checkins, inferred, providers, spot_id=spot_id)

    def _from_checkin(self, checkin: RawCheckinMetric) -> list[FactorObservation]:
        observations = []
        when = checkin.timestamp

        if checkin.wifi_speed is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.WIFI,
                    value=rescale_ordinal(checkin.wifi_speed),
                    source=SourceTag.LIVE,
                    observed_at=when,
                )
            )
        if checkin.noise_level is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.NOISE,
                    value=invert_ordinal(checkin.noise_level),
                    source=SourceTag.LIVE,
                    observed_at=when,
                )
            )
        if checkin.busyness is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.CROWD,
                    value=rescale_ordinal(checkin.busyness),
                    source=SourceTag.LIVE,
                    observed_at=when,
                )
            )
        if checkin.laptop_friendly is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.LAPTOP,
                    value=100.0 if checkin.laptop_friendly else 0.0,
                    source=SourceTag.LIVE,
                    observed_at=when,
                )
            )

        # Unknown tags are dropped; a tag counts once per check-in
        canonical_tags = {t for t in (normalize_tag(tag) for tag in checkin.tags) if t}
        for tag in sorted(canonical_tags):
            observations.append(
                FactorObservation(
                    factor=FactorName.TAGS,
                    value=TAG_SCORES[tag],
                    source=SourceTag.LIVE,
                    weight=tag_importance(tag),
                    observed_at=when,
                    label=tag,
                )
            )

        return observations

    def _latest_inferred(
        self, signals: list[InferredReviewSignal]
    ) -> InferredReviewSignal | None:
        if not signals:
            return None
        return max(signals, key=lambda s: s.analyzed_at or _EPOCH)

    def _from_inferred(self, signal: InferredReviewSignal) -> list[FactorObservation]:
        observations = []
        when = signal.analyzed_at
        # An inference result stands for at least one sample
        count = max(signal.review_count, 1)

        if signal.has_wifi is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.WIFI,
                    value=INFERRED_POSITIVE_SCORE if signal.has_wifi else INFERRED_NEGATIVE_SCORE,
                    source=SourceTag.INFERRED,
                    confidence=signal.wifi_confidence,
                    count=count,
                    observed_at=when,
                )
            )
        if signal.inferred_noise is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.NOISE,
                    value=invert_ordinal(NOISE_LABEL_LEVELS[signal.inferred_noise.value]),
                    source=SourceTag.INFERRED,
                    confidence=signal.noise_confidence,
                    count=count,
                    observed_at=when,
                    label=signal.inferred_noise.value,
                )
            )
        if signal.good_for_studying is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.LAPTOP,
                    value=(
                        INFERRED_POSITIVE_SCORE
                        if signal.good_for_studying
                        else INFERRED_NEGATIVE_SCORE
                    ),
                    source=SourceTag.INFERRED,
                    confidence=signal.studying_confidence,
                    count=count,
                    observed_at=when,
                )
            )

        return observations

    def _from_provider(self, record: ExternalProviderRecord) -> list[FactorObservation]:
        observations = []
        when = record.fetched_at
        provider = record.provider.value

        if record.rating is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.EXTERNAL_RATING,
                    value=rescale_ordinal(record.rating),
                    source=SourceTag.EXTERNAL,
                    weight=PROVIDER_WEIGHTS[provider],
                    count=record.review_count,
                    observed_at=when,
                    label=provider,
                )
            )
        if record.is_open is not None:
            observations.append(
                FactorObservation(
                    factor=FactorName.OPEN_STATUS,
                    value=100.0 if record.is_open else 0.0,
                    source=SourceTag.EXTERNAL,
                    observed_at=when,
                    label=provider,
                )
            )

        # One venue vote per provider, from its first recognizable category
        venues = [v for v in (classify_venue(c) for c in record.categories) if v]
        specific = [v for v in venues if v != "other"]
        if venues:
            venue = specific[0] if specific else venues[0]
            observations.append(
                FactorObservation(
                    factor=FactorName.VENUE_TYPE,
                    value=venue_prior(venue),
                    source=SourceTag.EXTERNAL,
                    observed_at=when,
                    label=venue,
                )
            )

        return observations

    def _from_venue_types(self, venue_types: Iterable[str]) -> list[FactorObservation]:
        venues = [v for v in (classify_venue(t) for t in venue_types) if v]
        specific = [v for v in venues if v != "other"]
        if not venues:
            return []
        venue = specific[0] if specific else venues[0]
        return [
            FactorObservation(
                factor=FactorName.VENUE_TYPE,
                value=venue_prior(venue),
                source=SourceTag.EXTERNAL,
                label=venue,
            )
        ]

    def _drop_unclassified_venues(
        self, grouped: dict[FactorName, list[FactorObservation]]
    ) -> None:
        """Discard "other" venue votes when any source names a specific venue."""
        venues = grouped.get(FactorName.VENUE_TYPE)
        if not venues:
            return
        specific = [obs for obs in venues if obs.label != "other"]
        if specific:
            grouped[FactorName.VENUE_TYPE] = specific

    def _consensus_price(
        self,
        checkins: list[RawCheckinMetric],
        providers: list[ExternalProviderRecord],
    ) -> int | None:
        """Most common price level across check-ins and providers."""
        levels = [c.price_level for c in checkins if c.price_level is not None]
        levels += [p.price_level for p in providers if p.price_level is not None]
        if not levels:
            return None
        # Ties resolve to the cheaper level
        return min(set(levels), key=lambda level: (-levels.count(level), level))
