"""
System clock implementation of ClockProtocol
"""

from datetime import datetime, timezone


class SystemClock:
    """Wall-clock time in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


__all__ = ["SystemClock"]
