"""Wall clock implementing ClockPort."""

from datetime import datetime, timezone


class SystemClock:
    """Stateless "now", safe to share between concurrent parses."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
