"""Custom exceptions for correspondence context."""

from typing import Optional


class CoverLetterExportError(Exception):
    """
    Exception raised when a cover letter cannot be serialized to an export format.

    The letter text itself is never modified, so the caller can retry or fall
    back to another format.

    Attributes:
        message: Error description
        fmt: Export format that failed (e.g., "docx")
        original_error: The underlying library error
    """

    def __init__(
        self,
        message: str,
        fmt: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.fmt = fmt
        self.original_error = original_error

        parts = [message]
        if fmt:
            parts.append(f"Format: {fmt}")
        if original_error:
            parts.append(f"\nOriginal error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))
