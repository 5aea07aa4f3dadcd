"""Time formatting helpers."""

from datetime import datetime

# Interval lengths in seconds, with singular and plural renderings
_INTERVALS: list[tuple[int, str, str]] = [
    (31_536_000, "A year ago", "{} years ago"),
    (2_592_000, "A month ago", "{} months ago"),
    (86_400, "Yesterday", "{} days ago"),
    (3_600, "An hour ago", "{} hours ago"),
    (60, "A minute ago", "{} minutes ago"),
]


def time_ago(now: datetime, then: datetime) -> str:
    """Return a time difference in the "time ago" notation.

    Args:
        now: Current moment
        then: Past moment

    Returns:
        Human-readable string such as "3 hours ago" or "Just now"
    """
    # Naive moments are taken as local time
    if now.tzinfo is None:
        now = now.astimezone()
    if then.tzinfo is None:
        then = then.astimezone()

    seconds = int((now - then).total_seconds())
    for length, singular, plural in _INTERVALS:
        interval = seconds // length
        if interval > 1:
            return plural.format(interval)
        if interval == 1:
            return singular
    return "Just now"
