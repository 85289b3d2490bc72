"""
Correspondence Context

Cover letter assembly, zone parsing, and HTML/DOCX rendering. The plain-text
letter is the source of truth; structure is re-derived on every render.
"""

from mastercv.contexts.correspondence.assembler import assemble_cover_letter
from mastercv.contexts.correspondence.docx_renderer import (
    render_cover_letter_docx,
    save_cover_letter_docx,
)
from mastercv.contexts.correspondence.exceptions import CoverLetterExportError
from mastercv.contexts.correspondence.html_renderer import render_cover_letter_html
from mastercv.contexts.correspondence.letter_parser import (
    ClassifiedLine,
    LineKind,
    ParsedCoverLetter,
    Zone,
    classify_line,
    parse_cover_letter,
)

__all__ = [
    "ClassifiedLine",
    "CoverLetterExportError",
    "LineKind",
    "ParsedCoverLetter",
    "Zone",
    "assemble_cover_letter",
    "classify_line",
    "parse_cover_letter",
    "render_cover_letter_docx",
    "render_cover_letter_html",
    "save_cover_letter_docx",
]
