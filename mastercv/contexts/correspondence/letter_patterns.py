"""
Cover Letter Pattern Constants

Literal markers and regex patterns that delimit the zones of the canonical
plain-text cover letter. The assembler writes these markers and the parser
recognizes them, so both sides must import from here.
"""

import re
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LetterMarkers:
    """Literal lines written by the assembler."""

    SALUTATION: str = "Dear Hiring Manager,"
    CLOSING: str = "Sincerely,"
    DEFAULT_NAME: str = "Applicant"
    EMAIL_LABEL: str = "Email:"
    PHONE_LABEL: str = "Phone:"
    CONTACT_LABELS: Tuple[str, ...] = ("Email:", "Phone:")


class LetterRegex:
    """
    Compiled patterns for zone transitions.

    Both are matched against stripped lines.
    """

    # Prefix match: "Dear Hiring Manager," and "Dear hiring manager at Acme" both open the body
    SALUTATION = re.compile(r"^Dear Hiring Manager", re.IGNORECASE)

    # Whole-line match: "Sincerely," / "Sincerely." / "Sincerely" but not "Sincerely yours"
    CLOSING = re.compile(r"^Sincerely[,.]?$", re.IGNORECASE)
