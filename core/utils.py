"""
Shared helpers for timestamps, tags and frame ordering
"""

from datetime import datetime, timezone


def utcnow():
    """Naive UTC timestamp, the form stored in DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None


def normalize_tags(tags):
    """Lower-case, strip and de-duplicate tags keeping first-seen order"""
    seen = []
    for tag in tags or []:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def full_name(first_name, last_name):
    return " ".join(part for part in (first_name, last_name) if part)


def sequence_order(entries, key="frame_number"):
    """
    Stable ordering for a submitted frame list.

    Entries carrying an explicit number sort by it, the rest by their list
    position; ties keep list order.
    """
    indexed = list(enumerate(entries))
    indexed.sort(
        key=lambda pair: (
            pair[1].get(key) if pair[1].get(key) is not None else pair[0],
            pair[0],
        )
    )
    return [entry for _, entry in indexed]


def clamp(value, lower, upper):
    return max(lower, min(value, upper))
