"""Timestamps for log directories, records and events, and their display."""

from datetime import datetime

# (unit suffix, seconds per unit), largest first
_RELATIVE_UNITS = (("d", 86400), ("h", 3600), ("m", 60))


def now() -> str:
    """Compact timestamp for directory names (e.g., "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 timestamp with microseconds, used for event and record ordering."""
    return datetime.now().isoformat()


def today() -> str:
    """Date stamp (e.g., "2025-11-14")."""
    return datetime.now().strftime("%Y-%m-%d")


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Display an ISO 8601 timestamp from the record store or event log.

    Absolute form drops the microseconds ("2025-11-13 18:45:40"); relative form
    uses the largest whole unit ("30s ago", "2h ago", "5d ago"). Strings that
    do not parse are returned unchanged.

    Example:
        >>> format_timestamp("2025-11-13T18:45:40.572549")
        '2025-11-13 18:45:40'
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp)
    except (ValueError, TypeError):
        return iso_timestamp

    if not relative:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    seconds = int((datetime.now() - dt).total_seconds())
    suffix = "ago" if seconds >= 0 else "from now"
    seconds = abs(seconds)
    for unit, size in _RELATIVE_UNITS:
        if seconds >= size:
            return f"{seconds // size}{unit} {suffix}"
    return f"{seconds}s {suffix}"
