"""
Event logging utilities for resumecraft (Tier 2 logging).

Appends product events (resume saved, export finished, score computed) to a
JSON Lines log, one JSON object per line. This replaces the hosted analytics
table: events are write-only from the application's point of view and are read
back only for inspection.

For detailed within-context logging (Tier 1), use resumecraft.utils.logger instead.

Usage:
    from resumecraft.utils.event_logging import log_event

    log_event(
        event_type="resume_created",
        source="authoring",
        resume_id="4f3c...",
        owner_id="user-1",
    )
"""

import json
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

from resumecraft.utils.timestamp import now_exact

load_dotenv()
EVENTS_FILE = Path(os.getenv("EVENTS_FILE", "outs/logs/resume_events.log"))


def log_event(event_type: str, source: str, **extra_fields) -> bool:
    """
    Append an event to the event log.

    Event tracking is non-blocking: a failed write is reported as a warning and
    never propagates to the caller.

    Args:
        event_type: Type of event (e.g., "resume_created", "export_completed")
        source: Event source (e.g., "authoring", "rendering", "scoring", "cli")
        **extra_fields: Additional event-specific fields

    Returns:
        True if the event was written, False otherwise
    """
    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "source": source,
        **extra_fields,
    }

    try:
        EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(EVENTS_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, default=str) + "\n")
    except OSError as e:
        logger.warning(f"Event tracking failed for '{event_type}': {e}")
        return False

    return True


def get_recent_events(
    n: int = 10, event_type: Optional[str] = None, resume_id: Optional[str] = None
) -> List[dict]:
    """
    Get the last n events from the event log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        event_type: Filter to only events of this type (optional)
        resume_id: Filter to only events for this record (optional)

    Returns:
        List of event dicts (most recent last)
    """
    if not EVENTS_FILE.exists():
        return []

    events = []
    with open(EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    if resume_id:
        events = [e for e in events if e.get("resume_id") == resume_id]

    return events[-n:] if len(events) > n else events
