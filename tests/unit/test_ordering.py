import random
import pytest
from datetime import date

from calendar_tracker.domain.ordering import civil_date_key, sort_civil_dates, sorted_days


@pytest.mark.unit
class TestCivilDateOrdering:

    def test_key_orders_by_year_then_month_then_day(self):
        assert civil_date_key(date(2023, 12, 31)) < civil_date_key(date(2024, 1, 1))
        assert civil_date_key(date(2024, 1, 31)) < civil_date_key(date(2024, 2, 1))
        assert civil_date_key(date(2024, 2, 1)) < civil_date_key(date(2024, 2, 2))
        assert civil_date_key(date(2024, 2, 2)) == civil_date_key(date(2024, 2, 2))

    def test_sorts_unordered_dates_ascending(self):
        # Arrange
        expected = [date(2023, 12, 30), date(2024, 1, 1), date(2024, 1, 2), date(2024, 2, 29)]
        shuffled = expected[:]
        random.Random(7).shuffle(shuffled)

        # Act
        result = sort_civil_dates(shuffled)

        # Assert
        assert result == expected

    def test_result_is_strictly_ascending_and_distinct(self):
        days = [date(2024, 1, 3), date(2024, 1, 1), date(2024, 1, 3)]

        result = sort_civil_dates(days)

        assert result == [date(2024, 1, 1), date(2024, 1, 3)]
        assert all(a < b for a, b in zip(result, result[1:]))

    def test_sorting_is_idempotent(self):
        once = sort_civil_dates([date(2024, 3, 1), date(2024, 1, 1), date(2024, 2, 1)])

        assert sort_civil_dates(once) == once

    def test_sorted_days_of_mapping(self):
        totals = {date(2024, 1, 2): 1, date(2023, 1, 2): 2, date(2024, 1, 1): 3}

        assert sorted_days(totals) == [date(2023, 1, 2), date(2024, 1, 1), date(2024, 1, 2)]

    def test_sorted_days_of_empty_mapping(self):
        assert sorted_days({}) == []
