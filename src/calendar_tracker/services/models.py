"""
Service layer models - results of computing statistics.

These models represent the output of a statistics run, not domain entities.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Tuple
from calendar_tracker.categorization.categories import UNCATEGORIZED
from calendar_tracker.domain.models import Event
from calendar_tracker.domain.ordering import sorted_days

@dataclass(frozen=True)
class StatisticsResult:
    """
    Time spent per day and per category for one batch of events.

    Every contributing event is counted once in day_totals and once in
    category_totals, so both always add up to the same grand total.
    """

    day_totals: Dict[date, timedelta] = field(default_factory=dict)
    category_totals: Dict[str, timedelta] = field(default_factory=dict)

    # Contributed to the Uncategorized bucket, input order
    unrecognized: List[Event] = field(default_factory=list)

    # Excluded from all totals: missing/unparseable times or negative duration
    skipped: List[Event] = field(default_factory=list)

    # Configured category names in declaration order, Uncategorized last
    categories: List[str] = field(default_factory=lambda: [UNCATEGORIZED])

    @property
    def grand_total(self) -> timedelta:
        """Total time of all contributing events"""
        return sum(self.day_totals.values(), timedelta())

    @property
    def has_data(self) -> bool:
        """False when no event contributed any time"""
        return self.grand_total > timedelta()

    @property
    def days(self) -> List[date]:
        """Days with recorded time, oldest first"""
        return sorted_days(self.day_totals)

    def category_total(self, category: str) -> timedelta:
        return self.category_totals.get(category, timedelta())

    def category_percentages(self) -> List[Tuple[str, int]]:
        """
        Share of the grand total per category, in declaration order.

        Percentages are truncated to whole numbers. When the grand total
        is zero there is nothing to divide and every share is 0.
        """
        total = self.grand_total
        percentages = []
        for category in self.categories:
            if total > timedelta():
                percent = (self.category_total(category) * 100) // total
            else:
                percent = 0
            percentages.append((category, percent))
        return percentages

    def __str__(self) -> str:
        """Human-readable summary"""
        lines = [
            f"Days: {len(self.day_totals)}",
            f"Total: {self.grand_total}",
            f"Unrecognized events: {len(self.unrecognized)}",
        ]
        if self.skipped:
            lines.append(f"Skipped events: {len(self.skipped)}")
        return "\n".join(lines)
