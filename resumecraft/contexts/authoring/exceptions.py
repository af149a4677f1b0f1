"""Custom exceptions for the authoring context."""

from typing import Optional


class UploadValidationError(ValueError):
    """
    Raised when an uploaded resume file is rejected before processing.

    Covers wrong file type, oversize files, and files without enough readable
    text. Fully recoverable: the user can retry with another file.
    """

    pass


class AssistantError(RuntimeError):
    """
    Raised when an AI-assisted operation (advice, rewriting, resume import) fails.

    Attributes:
        message: User-facing description
        original_error: The underlying exception, if any
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)


class RecordNotFoundError(KeyError):
    """Raised when a stored resume record does not exist."""

    def __init__(self, resume_id: str):
        self.resume_id = resume_id
        super().__init__(f"Resume record not found: {resume_id}")

    def __str__(self) -> str:
        return self.args[0]


class TemplateNotFoundError(KeyError):
    """Raised when no starter template has the requested id."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Starter template not found: {template_id}")

    def __str__(self) -> str:
        return self.args[0]
