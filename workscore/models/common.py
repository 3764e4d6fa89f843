from datetime import UTC, datetime


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def _require_aware(value: datetime | None) -> datetime | None:
    """Reject naive datetimes so window and staleness math stays in UTC."""
    if value is not None and value.tzinfo is None:
        msg = f"Timestamp {value.isoformat()} must be timezone-aware"
        raise ValueError(msg)
    return value
