"""Unit tests for cover letter assembly."""

import pytest

from mastercv.contexts.correspondence import assemble_cover_letter

FIXED_DATE = "October 19, 2026"


@pytest.fixture(autouse=True)
def fixed_date(monkeypatch):
    monkeypatch.setattr(
        "mastercv.contexts.correspondence.assembler.long_date_today", lambda: FIXED_DATE
    )


@pytest.mark.unit
def test_full_layout():
    letter = assemble_cover_letter(
        name="Jane Doe",
        email="j@x.com",
        phone="555-0100",
        company="Acme",
        body="  Para one.\n\nPara two.\n",
    )

    assert letter == "\n".join(
        [
            "Jane Doe",
            "",
            "Email: j@x.com",
            "Phone: 555-0100",
            "",
            FIXED_DATE,
            "",
            "Acme",
            "",
            "Dear Hiring Manager,",
            "",
            "Para one.",
            "",
            "Para two.",
            "",
            "Sincerely,",
            "Jane Doe",
        ]
    )


@pytest.mark.unit
def test_missing_phone_omits_line():
    letter = assemble_cover_letter(name="Jane Doe", email="j@x.com", company="Acme", body="Hi.")

    assert "Email: j@x.com" in letter
    assert "Phone:" not in letter


@pytest.mark.unit
def test_contact_slot_kept_when_both_absent():
    """The contact block collapses to one empty line; later zones keep their positions."""
    lines = assemble_cover_letter(name="Jane Doe", company="Acme", body="Hi.").split("\n")

    assert lines[0] == "Jane Doe"
    assert lines[1:4] == ["", "", ""]
    assert lines[4] == FIXED_DATE
    assert lines[6] == "Acme"
    assert lines[8] == "Dear Hiring Manager,"


@pytest.mark.unit
def test_empty_company_is_blank_line():
    lines = assemble_cover_letter(name="Jane", email="j@x.com", body="Hi.").split("\n")
    assert lines[6] == ""
    assert lines[8] == "Dear Hiring Manager,"


@pytest.mark.unit
def test_empty_name_falls_back():
    lines = assemble_cover_letter(body="Hi.").split("\n")

    assert lines[0] == "Applicant"
    assert lines[-1] == "Applicant"
    assert lines[-2] == "Sincerely,"


@pytest.mark.unit
def test_no_escaping_applied():
    letter = assemble_cover_letter(name="A & B", company="<Acme>", body="50% & more")

    assert "A & B" in letter
    assert "<Acme>" in letter
    assert "50% & more" in letter


@pytest.mark.unit
def test_date_read_at_call_time(monkeypatch):
    monkeypatch.setattr(
        "mastercv.contexts.correspondence.assembler.long_date_today", lambda: "January 1, 2027"
    )
    assert "January 1, 2027" in assemble_cover_letter(name="Jane", body="Hi.")


@pytest.mark.unit
def test_deterministic_for_fixed_date():
    kwargs = dict(name="Jane", email="j@x.com", phone="1", company="Acme", body="Hi.")
    assert assemble_cover_letter(**kwargs) == assemble_cover_letter(**kwargs)
