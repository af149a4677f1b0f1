"""
Shared utilities for resumecraft.

Common functionality used across contexts:
- Logging (loguru setup, JSON Lines event log)
- LLM providers and remote error messages
- PDF reading
- Grouping and timestamps
"""

from resumecraft.utils.grouping import group_by
from resumecraft.utils.timestamp import now, now_exact, today

__all__ = ["group_by", "now", "now_exact", "today"]
