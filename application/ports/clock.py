"""
Clock Interface (Port).

Session staleness and the "today" boundary of workout history both depend on
wall-clock time. Injecting the clock makes date rollover and inactivity
deterministic in tests.
"""
from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        """Current local date and time (naive, local timezone)."""
        ...

    def today(self) -> date:
        """Current local calendar date."""
        ...
