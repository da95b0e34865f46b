from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional

from calendar_tracker.domain.models import Event


class EventSourceError(Exception):
    """Raised when events cannot be retrieved from a source."""
    pass


@dataclass(frozen=True)
class TimeWindow:
    """Half-open [start, end) range of instants to fetch events for"""
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Window end {self.end} is before its start {self.start}")


def weeks_back_window(weeks: int, now: Optional[datetime] = None) -> TimeWindow:
    """
    Window covering the current week and `weeks` weeks before it.

    Weeks start on Monday 00:00 in the timezone of `now` (local time
    when not given). The window ends at the start of next week. Each
    boundary gets the UTC offset in force on its own date, so a week
    spanning a DST change is 167 or 169 hours long.

    Args:
        weeks: How many whole weeks before the current one to include

    Raises:
        ValueError: If weeks is negative
    """
    if weeks < 0:
        raise ValueError(f"weeks must not be negative, got {weeks}")

    if now is None:
        now = datetime.now().astimezone()

    this_monday = now.date() - timedelta(days=now.weekday())

    return TimeWindow(
        start=_midnight(this_monday - timedelta(weeks=weeks), now),
        end=_midnight(this_monday + timedelta(weeks=1), now),
    )


def _midnight(day: date, now: datetime) -> datetime:
    """00:00 on `day` in the timezone `now` is expressed in"""
    if isinstance(now.tzinfo, timezone) and now.utcoffset() == now.astimezone().utcoffset():
        # fixed offset from astimezone(): stands for the local zone, resolve the offset per date
        return datetime(day.year, day.month, day.day).astimezone()
    return datetime.combine(day, time(), tzinfo=now.tzinfo)


class EventSource(ABC):
    """
    Abstract base class for all event sources.

    Each source (remote calendar, cache file) implements this interface
    and hands raw API-shaped event resources to the caller.
    """

    @abstractmethod
    def fetch_items(self, window: TimeWindow) -> List[Dict[str, Any]]:
        """
        Retrieve raw event resources.

        Args:
            window: Time range to retrieve events for

        Returns:
            List of event resources in Google Calendar API shape

        Raises:
            EventSourceError: If the source cannot be read
        """
        pass

    def fetch_events(self, window: TimeWindow) -> List[Event]:
        """Retrieve events as domain objects, preserving source order"""
        return [Event.from_api(item) for item in self.fetch_items(window)]
