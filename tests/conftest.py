import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from calendar_tracker.categorization.categorizer import CategorizationEngine
from calendar_tracker.domain.models import Event


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """
    Factory for events starting at a given instant.

    Usage: make_event("Standup", "2024-01-01T09:00:00+00:00", hours=1)
    """
    def _make(
        summary: str,
        start: Optional[str],
        hours: float = 1,
        description: str = "",
        end: Optional[str] = None,
    ) -> Event:
        if end is None and start is not None:
            end = (datetime.fromisoformat(start) + timedelta(hours=hours)).isoformat()
        return Event(summary=summary, description=description, start=start, end=end)

    return _make


@pytest.fixture
def meetings_config() -> dict:
    """Two overlapping rules: the specific one first"""
    return {
        "rules": [
            {"category": "Meetings", "type": "keyword", "patterns": ["standup", "retro"]},
            {"category": "Team", "type": "keyword", "patterns": ["team"]},
        ]
    }


@pytest.fixture
def engine(meetings_config) -> CategorizationEngine:
    return CategorizationEngine(config=meetings_config)


@pytest.fixture
def now() -> datetime:
    """A Wednesday afternoon"""
    return datetime(2024, 1, 10, 15, 30, tzinfo=timezone.utc)
