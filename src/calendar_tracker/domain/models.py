from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional
from calendar_tracker.domain.enums import EventField


def parse_instant(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp into a timezone-aware datetime.

    Args:
        value: Raw timestamp string, e.g. '2024-01-01T09:00:00+01:00'

    Returns:
        Aware datetime, or None if the value is empty, malformed,
        or carries no UTC offset
    """
    if not value:
        return None

    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        return None

    return parsed


@dataclass(frozen=True)
class Event:
    """Core domain model representing a single calendar event"""
    summary: str = ""
    description: str = ""
    start: Optional[str] = None
    end: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "Event":
        """
        Build an event from a Google Calendar API event resource.

        All-day events carry 'date' rather than 'dateTime' and end up
        with no parseable instants.
        """
        start = item.get("start") or {}
        end = item.get("end") or {}
        return cls(
            id=item.get("id"),
            summary=item.get("summary") or "",
            description=item.get("description") or "",
            start=start.get("dateTime"),
            end=end.get("dateTime"),
        )

    @property
    def start_time(self) -> Optional[datetime]:
        return parse_instant(self.start)

    @property
    def end_time(self) -> Optional[datetime]:
        return parse_instant(self.end)

    @property
    def duration(self) -> Optional[timedelta]:
        """Time between start and end, None if either does not parse"""
        start, end = self.start_time, self.end_time
        if start is None or end is None:
            return None
        return end - start

    @property
    def civil_date(self) -> Optional[date]:
        """Calendar date of the start instant, in the start's own offset"""
        start = self.start_time
        return start.date() if start is not None else None

    def text_for(self, field: EventField) -> str:
        """Return the text a rule inspects for the given field"""
        if field == EventField.SUMMARY:
            return self.summary
        if field == EventField.DESCRIPTION:
            return self.description
        return f"{self.summary}\n{self.description}"

    def __repr__(self):
        return f"Event({self.start}, {self.summary[:30]!r})"
