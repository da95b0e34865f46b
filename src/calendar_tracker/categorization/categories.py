"""Reserved category names."""

# Bucket for events no configured rule matched
UNCATEGORIZED = "Uncategorized"

# How the reserved bucket is labelled in reports
UNCATEGORIZED_LABEL = "(uncategorized)"

RESERVED_NAMES = frozenset({UNCATEGORIZED})


def display_name(category: str) -> str:
    """Report label for a category name"""
    return UNCATEGORIZED_LABEL if category == UNCATEGORIZED else category
