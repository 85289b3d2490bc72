"""
Cover Letter Assembler

Combines identity fields and AI-written body prose into the canonical
plain-text cover letter. The date line is always read from the system clock
at assembly time.
"""

from mastercv.contexts.correspondence.letter_patterns import LetterMarkers
from mastercv.contexts.correspondence.logger import _log_debug
from mastercv.utils.timestamp import long_date_today


def assemble_cover_letter(
    name: str = "",
    email: str = "",
    phone: str = "",
    company: str = "",
    body: str = "",
) -> str:
    """
    Assemble a full cover letter from its constituent parts.

    Line layout (joined with newlines):
        name, blank, contact block, blank, date, blank, company, blank,
        salutation, blank, body, blank, closing, name

    The contact block holds "Email: ..." then "Phone: ..." for whichever are
    present. When both are absent the block is a single empty line so that
    every later zone keeps its position.

    Args:
        name: Applicant's full name ("Applicant" when empty)
        email: Applicant's email
        phone: Applicant's phone
        company: Target company name (may be empty)
        body: Body paragraphs separated by blank lines

    Returns:
        Full assembled plain-text cover letter (no escaping applied)
    """
    display_name = name or LetterMarkers.DEFAULT_NAME

    contact_lines = []
    if email:
        contact_lines.append(f"{LetterMarkers.EMAIL_LABEL} {email}")
    if phone:
        contact_lines.append(f"{LetterMarkers.PHONE_LABEL} {phone}")

    parts = [
        display_name,
        "",
        "\n".join(contact_lines),
        "",
        long_date_today(),
        "",
        company or "",
        "",
        LetterMarkers.SALUTATION,
        "",
        (body or "").strip(),
        "",
        LetterMarkers.CLOSING,
        display_name,
    ]

    _log_debug(f"Assembled cover letter for {display_name} ({len(contact_lines)} contact lines)")
    return "\n".join(parts)
