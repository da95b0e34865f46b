from abc import ABC, abstractmethod
from typing import Optional

from calendar_tracker.domain.models import Event

class CategorizationRule(ABC):
    """
    Abstract base class for all categorization rules.

    Implements Chain of Responsibility:
    - Each rule tries to categorize an event
    - If it can't it passes to the next rule
    - Rules are tried in declaration order, the first match wins

    Usage:
        Create chain: specific -> general -> default
        ```
        standup = KeywordRule("Meetings", ["standup"])
        focus = RegexRule("Focus", [r"^focus"])
        default_rule = DefaultRule()

        standup.set_next(focus).set_next(default_rule)

        category = standup.categorize(event)
        ```
    """

    def __init__(self, category: str):
        self.category = category
        self._next_rule: Optional['CategorizationRule'] = None


    def set_next(self, rule: 'CategorizationRule') -> 'CategorizationRule':
        """
        Set the next rule in the chain.

        Args:
            rule: The next rule to try if this one doesn't match

        Returns:
            The rule that was set (for chaining)

        Example:
            `rule1.set_next(rule2).set_next(rule3)`
        """
        self._next_rule = rule
        return rule

    @property
    def next_rule(self) -> Optional['CategorizationRule']:
        return self._next_rule

    @abstractmethod
    def _matches(self, event: Event) -> bool:
        """
        Check if this rule matches the event.

        Subclasses implement their specific matching logic here.

        Args:
            event: Event to check

        Returns:
            True if this rule claims the event
        """
        pass


    def categorize(self, event: Event) -> Optional[str]:
        """
        Attempt to categorize an event.

        This is the main method called by clients. It:
        1. Checks if a rule matches
        2. If yes, returns its category
        3. If no, tries the next rule in the chain

        Later rules never see an event claimed by an earlier one.

        Args:
            event: Event to categorize.

        Returns:
            Category name, or None if no rules matched
        """
        if self._matches(event):
            return self.category

        if self._next_rule:
            return self._next_rule.categorize(event)

        return None

    def __repr__(self):
        return f"{self.__class__.__name__}('{self.category}')"
