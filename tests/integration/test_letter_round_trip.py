"""Assembled letters parse back into the zones they were assembled from."""

import pytest

from mastercv.contexts.correspondence import (
    LineKind,
    Zone,
    assemble_cover_letter,
    parse_cover_letter,
    render_cover_letter_html,
)

FIXED_DATE = "October 19, 2026"


@pytest.fixture(autouse=True)
def fixed_date(monkeypatch):
    monkeypatch.setattr(
        "mastercv.contexts.correspondence.assembler.long_date_today", lambda: FIXED_DATE
    )


@pytest.mark.integration
def test_assembled_letter_zones():
    letter = assemble_cover_letter(
        name="Jane Doe",
        email="jane@example.com",
        phone="555-0100",
        company="Acme",
        body="First paragraph.\n\nSecond paragraph.",
    )

    parsed = parse_cover_letter(letter)

    assert parsed.has_salutation
    assert parsed.name == "Jane Doe"
    assert parsed.contact_lines == ["Email: jane@example.com", "Phone: 555-0100"]
    assert parsed.pre_date_lines == [FIXED_DATE, "Acme"]
    assert parsed.paragraphs == ["Dear Hiring Manager,", "First paragraph.", "Second paragraph."]
    assert parsed.footer_lines == ["Sincerely,", "Jane Doe"]


@pytest.mark.integration
def test_zones_never_move_backwards():
    letter = assemble_cover_letter(name="Jane", email="j@x.com", company="Acme", body="Body.")

    order = [Zone.NAME, Zone.CONTACT, Zone.BODY, Zone.FOOTER]
    positions = [order.index(line.zone) for line in parse_cover_letter(letter).lines]

    assert positions == sorted(positions)


@pytest.mark.integration
def test_body_edits_keep_zones_stable():
    letter = assemble_cover_letter(name="Jane", email="j@x.com", company="Acme", body="Original.")
    edited = letter.replace("Original.", "Rewritten opening.\n\nA brand new paragraph.")

    parsed = parse_cover_letter(edited)

    assert parsed.name == "Jane"
    assert parsed.contact_lines == ["Email: j@x.com"]
    assert parsed.paragraphs[1:] == ["Rewritten opening.", "A brand new paragraph."]
    assert [line.kind for line in parsed.lines if line.zone is Zone.FOOTER][:2] == [
        LineKind.CLOSING,
        LineKind.FOOTER,
    ]


@pytest.mark.integration
def test_anonymous_letter_renders():
    letter = assemble_cover_letter(body="Hello.")

    parsed = parse_cover_letter(letter)
    html = render_cover_letter_html(letter)

    assert parsed.name == "Applicant"
    assert parsed.footer_lines == ["Sincerely,", "Applicant"]
    assert "<p>Hello.</p>" in html
