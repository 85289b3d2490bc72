"""
Cover Letter DOCX Renderer

Maps the zones of a parsed cover letter to styled Word paragraphs, one
paragraph per input line. Blank lines become empty spacer paragraphs, so any
input (including "") yields a valid document.
"""

import re
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Dict, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from mastercv.contexts.correspondence.exceptions import CoverLetterExportError
from mastercv.contexts.correspondence.letter_parser import (
    ClassifiedLine,
    LineKind,
    Zone,
    parse_cover_letter,
)
from mastercv.contexts.correspondence.logger import _log_error, log_export_result, log_parse_summary

FONT_NAME = "Calibri"
MUTED_COLOR = RGBColor(0x55, 0x55, 0x55)

# Characters XML 1.0 cannot carry; lxml rejects them in run text
_XML_INCOMPATIBLE_RE = re.compile(r"[\x00-\x08\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
_XML_SPACE_LIKE_RE = re.compile(r"[\x0b\x0c]")


@dataclass(frozen=True)
class LineStyle:
    """Run and paragraph formatting for one kind of line."""

    size: float
    space_after: float
    bold: bool = False
    color: Optional[RGBColor] = None
    line_spacing: Optional[float] = None
    justify: bool = False


@dataclass(frozen=True)
class PageLayout:
    """Page margins in inches."""

    TOP: float = 1.0
    BOTTOM: float = 1.0
    LEFT: float = 1.25
    RIGHT: float = 1.25


NAME_STYLE = LineStyle(size=18, space_after=3, bold=True)
CONTACT_STYLE = LineStyle(size=11, space_after=3, color=MUTED_COLOR)
BODY_STYLE = LineStyle(size=12, space_after=5, line_spacing=1.15, justify=True)
FOOTER_STYLE = LineStyle(size=12, space_after=4)

# Spacing after an empty paragraph, by zone (points)
BLANK_SPACING: Dict[Zone, float] = {
    Zone.NAME: 2,
    Zone.CONTACT: 4,
    Zone.BODY: 4,
    Zone.FOOTER: 3,
}


def _style_for(line: ClassifiedLine) -> LineStyle:
    if line.kind is LineKind.NAME:
        return NAME_STYLE
    if line.zone is Zone.CONTACT:
        return CONTACT_STYLE
    if line.zone is Zone.FOOTER:
        return FOOTER_STYLE
    return BODY_STYLE


def _xml_safe(text: str) -> str:
    """Turn vertical tabs and form feeds into spaces and drop other XML-incompatible characters."""
    return _XML_INCOMPATIBLE_RE.sub("", _XML_SPACE_LIKE_RE.sub(" ", text))


def _add_line(document, line: ClassifiedLine) -> None:
    paragraph = document.add_paragraph()

    if line.kind is LineKind.BLANK:
        paragraph.paragraph_format.space_after = Pt(BLANK_SPACING[line.zone])
        return

    style = _style_for(line)
    run = paragraph.add_run(_xml_safe(line.text))
    run.font.name = FONT_NAME
    run.font.size = Pt(style.size)
    run.font.bold = style.bold
    if style.color is not None:
        run.font.color.rgb = style.color

    paragraph_format = paragraph.paragraph_format
    paragraph_format.space_after = Pt(style.space_after)
    if style.line_spacing is not None:
        paragraph_format.line_spacing = style.line_spacing
    if style.justify:
        paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY


def build_cover_letter_document(text: str):
    """
    Build a python-docx Document for cover letter text.

    Args:
        text: Cover letter text, in any shape

    Returns:
        docx.document.Document
    """
    letter = parse_cover_letter(text)
    log_parse_summary(letter)

    document = Document()

    normal = document.styles["Normal"]
    normal.font.name = FONT_NAME
    normal.font.size = Pt(12)

    for section in document.sections:
        section.top_margin = Inches(PageLayout.TOP)
        section.bottom_margin = Inches(PageLayout.BOTTOM)
        section.left_margin = Inches(PageLayout.LEFT)
        section.right_margin = Inches(PageLayout.RIGHT)

    for line in letter.lines:
        _add_line(document, line)

    return document


def render_cover_letter_docx(text: str) -> bytes:
    """
    Render cover letter text as DOCX bytes.

    Raises:
        CoverLetterExportError: If the document cannot be built or serialized
    """
    try:
        document = build_cover_letter_document(text)
        buffer = BytesIO()
        document.save(buffer)
    except Exception as e:
        _log_error(f"DOCX export failed: {e}")
        raise CoverLetterExportError("Failed to build DOCX cover letter", "docx", e) from e
    return buffer.getvalue()


def save_cover_letter_docx(text: str, output_path: Path) -> Path:
    """
    Render cover letter text and write it to output_path.

    Raises:
        CoverLetterExportError: If rendering or writing fails
    """
    content = render_cover_letter_docx(text)
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(content)
    except OSError as e:
        raise CoverLetterExportError(f"Failed to write {output_path}", "docx", e) from e

    log_export_result(output_path, "docx")
    return output_path
