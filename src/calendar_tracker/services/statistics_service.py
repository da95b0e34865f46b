import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from calendar_tracker.categorization import CategorizationEngine
from calendar_tracker.categorization.categories import UNCATEGORIZED
from calendar_tracker.domain.models import Event
from calendar_tracker.services.models import StatisticsResult
from calendar_tracker.sources.base import EventSource, TimeWindow, weeks_back_window

logger = logging.getLogger(__name__)


def compute_totals(
    events: Iterable[Event],
    engine: CategorizationEngine,
) -> StatisticsResult:
    """
    Aggregate event durations per day and per category in a single pass.

    For each event, in input order:
    1. Events without a usable start/end pair, or ending before they
       start, are skipped and contribute to nothing
    2. The duration is added to the event's civil date
    3. The duration is added to the first matching category; events
       no rule claims are also listed as unrecognized

    Malformed events never abort the batch.

    Args:
        events: Events to aggregate
        engine: Categorization engine holding the ordered rules

    Returns:
        StatisticsResult with day totals, category totals, unrecognized
        and skipped events
    """
    day_totals: Dict[date, timedelta] = {}
    category_totals: Dict[str, timedelta] = {}
    unrecognized: List[Event] = []
    skipped: List[Event] = []

    for event in events:
        duration = event.duration

        if duration is None:
            logger.warning(f"Skipping event with unparseable start/end: {event!r}")
            skipped.append(event)
            continue

        if duration < timedelta():
            logger.warning(f"Skipping event ending before it starts ({duration}): {event!r}")
            skipped.append(event)
            continue

        day = event.civil_date
        day_totals[day] = day_totals.get(day, timedelta()) + duration

        category = engine.categorize(event)
        category_totals[category] = category_totals.get(category, timedelta()) + duration

        if category == UNCATEGORIZED:
            unrecognized.append(event)

    return StatisticsResult(
        day_totals=day_totals,
        category_totals=category_totals,
        unrecognized=unrecognized,
        skipped=skipped,
        categories=engine.category_names,
    )


class StatisticsService:

    def __init__(
        self,
        source: EventSource,
        categorization_engine: Optional[CategorizationEngine] = None,
    ):
        self.source = source
        self._categorization_engine: Optional[CategorizationEngine] = categorization_engine

    @property
    def categorization_engine(self) -> CategorizationEngine:
        """Lazy-load categorization engine"""
        if self._categorization_engine is None:
            self._categorization_engine = CategorizationEngine()
        return self._categorization_engine

    def get_events(
        self,
        weeks: int = 0,
        now: Optional[datetime] = None,
    ) -> List[Event]:
        """
        Retrieve events for the current week and `weeks` weeks before it.

        Raises:
            EventSourceError: If the source cannot be read
            ValueError: If weeks is negative
        """
        window: TimeWindow = weeks_back_window(weeks, now)
        logger.debug(f"Fetching events from {window.start} to {window.end}")
        return self.source.fetch_events(window)

    def compute(self, events: Iterable[Event]) -> StatisticsResult:
        """Compute statistics for already retrieved events"""
        return compute_totals(events, self.categorization_engine)
