import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

from calendar_tracker.categorization.base import CategorizationRule
from calendar_tracker.categorization.rules import RULE_TYPES, DefaultRule
from calendar_tracker.categorization.categories import UNCATEGORIZED, RESERVED_NAMES
from calendar_tracker.domain.enums import EventField
from calendar_tracker.domain.models import Event
from calendar_tracker.config.settings import ConfigLoader

logger = logging.getLogger(__name__)


def build_rule(rule_def: Dict[str, Any]) -> CategorizationRule:
    """
    Create a single rule from its config definition.

    Args:
        rule_def: e.g. {"category": "Meetings", "type": "keyword", "patterns": ["standup"]}

    Raises:
        ValueError: If the definition is incomplete or names an unknown type/field
    """
    if not isinstance(rule_def, dict):
        raise ValueError(f"Rule definition must be an object, got {rule_def!r}")

    category = rule_def.get("category")
    if not category or not isinstance(category, str):
        raise ValueError(f"Rule is missing a category name: {rule_def!r}")

    patterns = rule_def.get("patterns")
    if not patterns or not isinstance(patterns, list):
        raise ValueError(f"Rule for '{category}' needs a non-empty list of patterns")
    if any(not isinstance(p, str) or not p.strip() for p in patterns):
        raise ValueError(f"Rule for '{category}' has a blank or non-text pattern: {patterns!r}")

    rule_type = rule_def.get("type", "keyword")
    if rule_type not in RULE_TYPES:
        available = ', '.join(RULE_TYPES.keys())
        raise ValueError(
            f"Unknown rule type '{rule_type}' for '{category}'. "
            f"Available types: {available}"
        )

    try:
        field = EventField(rule_def.get("field", EventField.ANY.value))
    except ValueError:
        available = ', '.join(f.value for f in EventField)
        raise ValueError(
            f"Unknown field '{rule_def.get('field')}' for '{category}'. "
            f"Available fields: {available}"
        )

    return RULE_TYPES[rule_type](category, patterns, field)


class CategorizationEngine:
    """
    Main engine for categorizing events.

    Builds a chain of rules in declaration order, ending with the
    default (Uncategorized) rule. The first matching rule wins, so
    specific rules must be listed before general ones.

    Usage:
        # Production - loads categories.json through ConfigLoader
        engine = CategorizationEngine()

        # Explicit file
        engine = CategorizationEngine(config_path=Path("my_rules.json"))

        # Testing - inject custom config
        test_config = {"rules": [...]}
        engine = CategorizationEngine(config=test_config)

        category = engine.categorize(event)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        config_path: Optional[Path] = None,
    ):
        """
        Initialize categorization engine.

        Args:
            config: Optional config dict. If None, loads from ConfigLoader.
            config_path: Optional rules file, used when config is None.

        Raises:
            ValueError: If the rule configuration is invalid
            FileNotFoundError: If no rules file could be found
        """
        self._rule_chain: Optional[CategorizationRule] = None
        self._rules: List[CategorizationRule] = []

        if config is None:
            config = ConfigLoader.load_rules_config(config_path)

        self._build_rule_chain(config)

    def _build_rule_chain(self, config: Dict[str, Any]) -> None:
        """
        Build the chain of responsibility from the rule definitions.

        Raises:
            ValueError: On malformed, duplicate or reserved category names
        """
        rule_defs = config.get("rules", [])
        if not isinstance(rule_defs, list):
            raise ValueError("'rules' must be a list of rule definitions")

        rules: List[CategorizationRule] = []
        seen = set()

        for rule_def in rule_defs:
            rule = build_rule(rule_def)

            if rule.category in RESERVED_NAMES:
                raise ValueError(f"'{rule.category}' is a reserved category name")
            if rule.category in seen:
                raise ValueError(f"Category '{rule.category}' is defined more than once")

            seen.add(rule.category)
            rules.append(rule)

        rules.append(DefaultRule(UNCATEGORIZED))

        self._rule_chain = rules[0]
        for i in range(len(rules) - 1):
            rules[i].set_next(rules[i+1])

        self._rules = rules
        logger.debug(f"Built rule chain with {len(rules)} rules")

    @property
    def category_names(self) -> List[str]:
        """Configured category names in declaration order, Uncategorized last"""
        return [rule.category for rule in self._rules]

    def categorize(self, event: Event) -> str:
        """
        Categorize a single event.

        Args:
            event: Event to categorize

        Returns:
            Category name, UNCATEGORIZED if no configured rule matched

        Example:
            ```
            >>> engine = CategorizationEngine(config={"rules": [
            ...     {"category": "Meetings", "patterns": ["standup"]}
            ... ]})
            >>> engine.categorize(Event(summary="Daily Standup"))
            'Meetings'
            ```
        """
        if not self._rule_chain:
            raise RuntimeError("Rule chain not initialized")

        category = self._rule_chain.categorize(event)

        assert category is not None, "Rule chain should never return None"

        return category

    def get_rule_chain_info(self) -> str:
        """
        Get information about the current rule chain.

        Useful for checking the order in which rules are tried.

        Returns:
            String description of the current rule chain.
        """
        if not self._rule_chain:
            return "No rules loaded"

        rules = []
        current = self._rule_chain
        priority = 1

        while current:
            rules.append(f"{priority}. {current}")
            current = current.next_rule
            priority += 1

        return "\n".join(rules)

    def __repr__(self) -> str:
        return f"CategorizationEngine({len(self._rules)} rules in chain)"
