"""Custom exceptions for the scoring context."""

from typing import Optional


class RemoteJudgmentError(RuntimeError):
    """
    Raised when the remote ATS judgment cannot be obtained.

    Covers provider failures (network, credentials, rate limits, missing API
    key) and responses that fail validation. There is no local fallback: this
    error always reaches the caller.

    Attributes:
        message: Stable user-facing description
        original_error: The underlying exception, if any
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)
