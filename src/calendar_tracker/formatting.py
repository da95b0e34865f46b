"""
Text rendering of statistics values.

Durations are shown either as XhYmZs strings or as decimal hours.
"""
from datetime import timedelta
from decimal import Decimal

from calendar_tracker.domain.models import Event

# Shown instead of a duration when an event's times cannot be parsed
PLACEHOLDER = "?"

MICROSECONDS_PER_SECOND = 1_000_000


def _trim(value: Decimal) -> str:
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_duration(duration: timedelta) -> str:
    """
    Render a duration as hours, minutes and seconds.

    Examples:
        >>> format_duration(timedelta(hours=1, minutes=30))
        '1h30m0s'
        >>> format_duration(timedelta(minutes=45))
        '45m0s'
        >>> format_duration(timedelta())
        '0s'
    """
    micros = (duration.days * 86400 + duration.seconds) * MICROSECONDS_PER_SECOND + duration.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    # Sub-second values get a finer unit rather than "0.0005s"
    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < MICROSECONDS_PER_SECOND:
        return f"{sign}{_trim(Decimal(micros) / 1000)}ms"

    whole_seconds, fraction = divmod(micros, MICROSECONDS_PER_SECOND)
    hours, remainder = divmod(whole_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    seconds_text = _trim(Decimal(seconds) + Decimal(fraction) / MICROSECONDS_PER_SECOND)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds_text}s"
    if minutes:
        return f"{sign}{minutes}m{seconds_text}s"
    return f"{sign}{seconds_text}s"


def format_decimal_hours(duration: timedelta) -> str:
    """Render a duration as fractional hours, e.g. '1.500000'"""
    return f"{duration / timedelta(hours=1):f}"


def format_total(duration: timedelta, decimal_output: bool = False) -> str:
    if decimal_output:
        return format_decimal_hours(duration)
    return format_duration(duration)


def format_unrecognized_event(event: Event) -> str:
    """
    One report line for an event: start, duration and summary.

    Events whose times cannot be parsed are rendered as a placeholder.
    """
    duration = event.duration
    if duration is None:
        return PLACEHOLDER
    return f"{event.start} {format_duration(duration):>10}  {event.summary}"
