import re
from typing import Dict, List, Type

from calendar_tracker.categorization.base import CategorizationRule
from calendar_tracker.categorization.categories import UNCATEGORIZED
from calendar_tracker.domain.models import Event
from calendar_tracker.domain.enums import EventField


class KeywordRule(CategorizationRule):
    """
    Rule that matches keywords in event text.

    Features:
    - Case-insensitive substring matching
    - Can match multiple keywords per category
    - Can be restricted to the summary or the description

    Example:
        ```
        # Match "Standup" or "Retro" in the title -> "Meetings"
        rule = KeywordRule("Meetings", ["standup", "retro"], EventField.SUMMARY)
        ```
    """

    def __init__(
            self,
            category: str,
            keywords: List[str],
            field: EventField = EventField.ANY
        ):
        """
        Initialize keyword rule

        Args:
            category: Category assigned to matching events
            keywords: Substrings to look for. Example: `["standup", "1:1"]`
            field: Which event text to search
        """
        super().__init__(category)
        self.keywords = keywords
        self.field = field

        # Pre-process keywords to lowercase for case-insensitive matching
        self._normalized = [kw.lower() for kw in keywords]

    def _matches(self, event: Event) -> bool:
        """Check if any keyword appears in the selected text"""
        text = event.text_for(self.field).lower()
        return any(keyword in text for keyword in self._normalized)

    def __repr__(self):
        return f"KeywordRule('{self.category}', {len(self.keywords)} keywords, field={self.field.value})"


class RegexRule(CategorizationRule):
    """
    Rule that matches regex patterns in event text.

    More powerful than KeywordRule - can anchor and match variations.

    Example:
        # Match "Review: ...", "PR review" but not "Preview"
        rule = RegexRule("Reviews", [r"^review", r"\\bpr review\\b"])
    """

    def __init__(
        self,
        category: str,
        patterns: List[str],
        field: EventField = EventField.ANY
    ):
        """
        Initialize regex rule.

        Args:
            category: Category assigned to matching events
            patterns: Regular expressions, searched case-insensitively
            field: Which event text to search

        Raises:
            ValueError: If a pattern does not compile
        """
        super().__init__(category)
        self.patterns = patterns
        self.field = field

        self._compiled: List[re.Pattern] = []
        for pattern in patterns:
            try:
                self._compiled.append(re.compile(pattern, re.IGNORECASE | re.MULTILINE))
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r} for category '{category}': {e}")

    def _matches(self, event: Event) -> bool:
        """Check if any pattern matches the selected text"""
        text = event.text_for(self.field)
        return any(pattern.search(text) for pattern in self._compiled)

    def __repr__(self) -> str:
        return f"RegexRule('{self.category}', {len(self.patterns)} patterns, field={self.field.value})"


class DefaultRule(CategorizationRule):
    """
    Fallback rule that always matches.

    Should be the last rule in the chain.
    Returns the reserved default category for every event.
    """

    def __init__(self, default_category: str = UNCATEGORIZED):
        """
        Initialize the default rule.

        Args:
            default_category: The default category to return
        """
        super().__init__(default_category)

    def _matches(self, _: Event) -> bool:
        """Always matches"""
        return True


# Rule variants selectable through the "type" key of a rule definition
RULE_TYPES: Dict[str, Type[CategorizationRule]] = {
    "keyword": KeywordRule,
    "regex": RegexRule,
}
