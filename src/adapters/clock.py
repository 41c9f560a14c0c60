from datetime import UTC, datetime


class SystemClock:
    """Wall clock for the lifecycle; always timezone-aware UTC."""

    def now_utc(self) -> datetime:
        return datetime.now(UTC)
