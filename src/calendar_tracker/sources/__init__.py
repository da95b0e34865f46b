"""Where calendar events come from: the Google Calendar API or a local cache file."""
from calendar_tracker.sources.base import EventSource, EventSourceError, TimeWindow, weeks_back_window
from calendar_tracker.sources.cache import CachedEventSource

__all__ = [
    "EventSource",
    "EventSourceError",
    "TimeWindow",
    "weeks_back_window",
    "CachedEventSource",
]
