"""
System clock.
"""
from datetime import date, datetime


class SystemClock:
    """Clock backed by the host's local time."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()
