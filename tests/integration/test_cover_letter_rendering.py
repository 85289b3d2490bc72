"""Integration tests for cover letter HTML and DOCX export."""

from io import BytesIO

import docx
import pytest
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from mastercv.contexts.correspondence import (
    CoverLetterExportError,
    render_cover_letter_docx,
    render_cover_letter_html,
    save_cover_letter_docx,
)
from mastercv.contexts.correspondence import docx_renderer


def _read_docx(content: bytes):
    return docx.Document(BytesIO(content))


def _paragraph(document, text: str):
    return next(paragraph for paragraph in document.paragraphs if paragraph.text == text)


@pytest.mark.integration
def test_html_zones(edited_letter):
    html = render_cover_letter_html(edited_letter)

    assert '<div class="cl-name">Jane Doe</div>' in html
    assert '<div class="cl-contact">Email: jane.doe@example.com</div>' in html
    assert '<div class="cl-contact">Phone: 555-0100</div>' in html
    assert "<p>March 3, 2025</p>" in html
    assert '<p class="footer-line">Sincerely,</p>' in html
    assert '<p class="footer-line">Jane Doe</p>' in html


@pytest.mark.integration
def test_html_escapes_user_text(edited_letter):
    html = render_cover_letter_html(edited_letter)

    assert "<p>Acme &amp; Sons &lt;Widgets&gt;</p>" in html
    assert "&lt;team&gt;" in html
    assert "<team>" not in html
    assert "&#34;real&#34;" in html
    assert "It&#39;s a great fit." in html


@pytest.mark.integration
def test_html_paragraph_lines_joined_with_breaks(edited_letter):
    html = render_cover_letter_html(edited_letter)

    assert "<p>Dear Hiring Manager,</p>" in html
    assert "your &lt;team&gt;.<br/>Second line of the first paragraph.</p>" in html


@pytest.mark.integration
def test_html_themes(edited_letter):
    light = render_cover_letter_html(edited_letter)
    dark = render_cover_letter_html(edited_letter, dark=True)

    assert "background: #ffffff;" in light
    assert "background: #1a1a2e;" in dark
    assert "color: #e2e2e2;" in dark
    assert "@media print" in dark


@pytest.mark.integration
def test_html_empty_input():
    html = render_cover_letter_html("")

    assert html.startswith("<!DOCTYPE html>")
    assert '<div class="cl-name"></div>' in html


@pytest.mark.integration
def test_docx_one_paragraph_per_line(edited_letter):
    document = _read_docx(render_cover_letter_docx(edited_letter))

    expected = [line.strip() for line in edited_letter.split("\n")]
    assert [paragraph.text for paragraph in document.paragraphs] == expected


@pytest.mark.integration
def test_docx_zone_styles(edited_letter):
    document = _read_docx(render_cover_letter_docx(edited_letter))

    name_run = document.paragraphs[0].runs[0]
    assert name_run.bold
    assert name_run.font.size == Pt(18)

    contact_run = _paragraph(document, "Email: jane.doe@example.com").runs[0]
    assert contact_run.font.size == Pt(11)
    assert contact_run.font.color.rgb == RGBColor(0x55, 0x55, 0x55)

    body = _paragraph(document, "It's a great fit.")
    assert body.alignment == WD_ALIGN_PARAGRAPH.JUSTIFY
    assert body.paragraph_format.line_spacing == pytest.approx(1.15)
    assert body.runs[0].font.size == Pt(12)

    closing = _paragraph(document, "Sincerely,")
    assert closing.alignment != WD_ALIGN_PARAGRAPH.JUSTIFY
    assert not closing.runs[0].bold


@pytest.mark.integration
def test_docx_page_margins(edited_letter):
    section = _read_docx(render_cover_letter_docx(edited_letter)).sections[0]

    assert section.left_margin == Inches(1.25)
    assert section.right_margin == Inches(1.25)
    assert section.top_margin == Inches(1)
    assert section.bottom_margin == Inches(1)


@pytest.mark.integration
def test_docx_empty_input_is_valid():
    document = _read_docx(render_cover_letter_docx(""))

    assert len(document.paragraphs) >= 1
    assert all(paragraph.text == "" for paragraph in document.paragraphs)


@pytest.mark.integration
def test_docx_control_characters():
    text = "Jane\x00Doe\n\nDear Hiring Manager,\n\nPage one\x0cPage two\nA\x0bB\x1b"

    document = _read_docx(render_cover_letter_docx(text))

    assert _paragraph(document, "JaneDoe").runs[0].bold
    texts = [paragraph.text for paragraph in document.paragraphs]
    assert "Page one Page two" in texts
    assert "A B" in texts


@pytest.mark.integration
def test_docx_failure_is_wrapped(monkeypatch):
    def broken_document():
        raise RuntimeError("template missing")

    monkeypatch.setattr(docx_renderer, "Document", broken_document)

    with pytest.raises(CoverLetterExportError) as exc_info:
        render_cover_letter_docx("Jane")

    assert isinstance(exc_info.value.original_error, RuntimeError)


@pytest.mark.integration
def test_save_docx(tmp_path, edited_letter):
    output = save_cover_letter_docx(edited_letter, tmp_path / "letters" / "acme.docx")

    assert output.exists()
    assert _read_docx(output.read_bytes()).paragraphs[0].text == "Jane Doe"
