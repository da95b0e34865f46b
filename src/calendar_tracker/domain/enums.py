from enum import Enum

class EventField(Enum):
    """Which free-text field of an event a rule looks at"""
    SUMMARY = "summary"
    DESCRIPTION = "description"
    ANY = "any" # summary or description
