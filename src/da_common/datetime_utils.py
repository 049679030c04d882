"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def to_epoch_ms(moment: datetime) -> int:
    """Milliseconds since the Unix epoch, the timestamp format browsers expect."""
    return int(moment.timestamp() * 1000)
