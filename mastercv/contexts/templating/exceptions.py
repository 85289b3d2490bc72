"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Any, Optional


class TemplateRenderError(Exception):
    """
    Raised when a section or structure template fails to render.

    Typically a StrictUndefined variable or a syntax error introduced by
    editing a template under TEMPLATING_CONTEXT_PATH.

    Attributes:
        message: Error description
        type_name: Section type being rendered (e.g., "experience")
        template_path: Template file on disk
        original_error: The Jinja2 error
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.type_name = type_name
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]
        if template_path:
            # Syntax errors carry the offending template line
            lineno = getattr(original_error, "lineno", None)
            parts.append(f"Template: {template_path}" + (f" (line {lineno})" if lineno else ""))
        if original_error:
            parts.append(f"Jinja2: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))


class InvalidCVStructureError(TypeError):
    """
    Exception raised when input is not shaped like a CV record at all.

    Missing or empty fields are never an error (they default to empty values);
    this is reserved for inputs such as a list or a string where a mapping is
    expected.

    Attributes:
        message: Error description
        field_path: Dotted path of the offending field (e.g., "experience[2]")
        value: The value that had the wrong shape
    """

    def __init__(self, message: str, field_path: Optional[str] = None, value: Any = None):
        self.message = message
        self.field_path = field_path
        self.value = value

        parts = [message]
        if field_path:
            parts.append(f"Field: {field_path}")
            parts.append(f"Got: {type(value).__name__}")

        super().__init__("\n".join(parts))
