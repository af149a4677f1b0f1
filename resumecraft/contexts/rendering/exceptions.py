"""Custom exceptions for the rendering context."""

from typing import Optional


class ExportError(RuntimeError):
    """
    Raised when the PDF rendering engine fails.

    export_resume() converts this into a failed ExportResult; callers of the
    public API never see it.

    Attributes:
        message: Error description
        original_error: The underlying exception, if any
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
