"""Custom exceptions for rendering context."""

from typing import Optional


class CompilerConfigurationError(RuntimeError):
    """
    Raised when a compilation backend is not configured.

    Attributes:
        message: Error description
        setting: Name of the missing environment variable
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        self.message = message
        self.setting = setting

        parts = [message]
        if setting:
            parts.append(f"Set the {setting} environment variable (see .env.example).")

        super().__init__("\n".join(parts))


class CompilationServiceError(RuntimeError):
    """
    Raised when the remote LaTeX server fails to return a PDF.

    Attributes:
        message: Error description
        status_code: HTTP status returned by the server (None for transport errors)
        details: Server-provided details (typically the "! ..." lines of the LaTeX log)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details

        parts = [message]
        if status_code is not None:
            parts.append(f"Status: {status_code}")
        if details:
            parts.append(f"\nDetails:\n{details}")

        super().__init__("\n".join(parts))
