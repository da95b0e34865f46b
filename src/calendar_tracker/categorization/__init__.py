"""
Categorization system for calendar events.

Provides event categorization using a chain of responsibility
pattern with configurable, ordered rules.

Quick Start:
    >>> from calendar_tracker.categorization import CategorizationEngine
    >>>
    >>> engine = CategorizationEngine()
    >>> category = engine.categorize(event)
    >>> print(f"Categorized as: {category}")
"""
from calendar_tracker.categorization.categorizer import CategorizationEngine
from calendar_tracker.categorization.base import CategorizationRule
from calendar_tracker.categorization.rules import (
    KeywordRule,
    RegexRule,
    DefaultRule
)
from calendar_tracker.categorization import categories

__all__ = [
    "CategorizationEngine",
    "CategorizationRule",
    "KeywordRule",
    "RegexRule",
    "DefaultRule",
    "categories",
]
