"""
Stable user-facing messages for remote-call failures.

Failures at the AI service boundary are surfaced to the user, wrapped in a
message chosen by pattern-matching the underlying error text. Order matters:
the first matching category wins.
"""

import re
from typing import List, Tuple

RATE_LIMITED = "The AI service is rate limiting requests. Please wait a moment and try again."
INVALID_CREDENTIALS = (
    "The AI service rejected the request credentials. "
    "Please check that your API key is configured correctly."
)
NETWORK_UNREACHABLE = (
    "The AI service could not be reached. Please check your network connection and try again."
)

ERROR_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"rate.?limit|\b429\b|quota|too many requests", re.IGNORECASE), RATE_LIMITED),
    (
        re.compile(
            r"api.?key|\b401\b|\b403\b|unauthori[sz]ed|authentication|credential|permission",
            re.IGNORECASE,
        ),
        INVALID_CREDENTIALS,
    ),
    (
        re.compile(
            r"connection|network|timed? ?out|unreachable|name resolution|enotfound",
            re.IGNORECASE,
        ),
        NETWORK_UNREACHABLE,
    ),
]


def describe_remote_error(error: BaseException) -> str:
    """
    Map an exception raised at the AI service boundary to a stable message.

    The exception's text (and its class name, which carries the category for SDK
    errors like RateLimitError or APIConnectionError) is matched against
    ERROR_PATTERNS. Unrecognized errors are passed through verbatim.

    Example:
        >>> describe_remote_error(RuntimeError("Error code: 429 - rate_limit_exceeded"))
        'The AI service is rate limiting requests. Please wait a moment and try again.'
    """
    text = f"{type(error).__name__}: {error}"
    for pattern, message in ERROR_PATTERNS:
        if pattern.search(text):
            return message
    return f"AI request failed: {error}"
