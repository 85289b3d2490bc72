"""
Cover Letter Parser

Re-derives the structural zones of a plain-text cover letter by scanning its
lines through a four-state machine (name -> contact -> body -> footer).

The letter may have been hand-edited arbitrarily, so parsing never fails:
every line is assigned to some zone. When no salutation is found, the lines
after the name/contact header are replayed from the body state, so they end
up in the body (or the footer, if a closing line is among them).
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from mastercv.contexts.correspondence.letter_patterns import LetterMarkers, LetterRegex

_PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")


class Zone(Enum):
    """Structural region of a cover letter, in document order."""

    NAME = "name"
    CONTACT = "contact"
    BODY = "body"
    FOOTER = "footer"


class LineKind(Enum):
    """What a single line is within its zone."""

    BLANK = "blank"
    NAME = "name"
    CONTACT = "contact"
    PRE_DATE = "pre_date"
    SALUTATION = "salutation"
    BODY = "body"
    CLOSING = "closing"
    FOOTER = "footer"


@dataclass(frozen=True)
class ClassifiedLine:
    """A stripped input line with the zone and kind it was assigned."""

    text: str
    zone: Zone
    kind: LineKind


def classify_line(line: str, zone: Zone) -> Tuple[Zone, ClassifiedLine]:
    """
    Classify one line given the current zone.

    Args:
        line: Raw input line (compared and stored stripped)
        zone: Zone the scanner is in before this line

    Returns:
        (zone after this line, classified line)
    """
    text = line.strip()

    if zone is Zone.NAME:
        if not text:
            return Zone.NAME, ClassifiedLine(text, Zone.NAME, LineKind.BLANK)
        return Zone.CONTACT, ClassifiedLine(text, Zone.NAME, LineKind.NAME)

    if zone is Zone.CONTACT:
        if LetterRegex.SALUTATION.match(text):
            return Zone.BODY, ClassifiedLine(text, Zone.BODY, LineKind.SALUTATION)
        if text.startswith(LetterMarkers.CONTACT_LABELS):
            return Zone.CONTACT, ClassifiedLine(text, Zone.CONTACT, LineKind.CONTACT)
        if text:
            return Zone.CONTACT, ClassifiedLine(text, Zone.CONTACT, LineKind.PRE_DATE)
        return Zone.CONTACT, ClassifiedLine(text, Zone.CONTACT, LineKind.BLANK)

    if zone is Zone.BODY:
        if LetterRegex.CLOSING.match(text):
            return Zone.FOOTER, ClassifiedLine(text, Zone.FOOTER, LineKind.CLOSING)
        kind = LineKind.BODY if text else LineKind.BLANK
        return Zone.BODY, ClassifiedLine(text, Zone.BODY, kind)

    kind = LineKind.FOOTER if text else LineKind.BLANK
    return Zone.FOOTER, ClassifiedLine(text, Zone.FOOTER, kind)


@dataclass
class ParsedCoverLetter:
    """
    Zones recovered from a cover letter.

    Attributes:
        lines: Every input line, in order, with its zone and kind
        has_salutation: Whether a salutation line opened the body
    """

    lines: List[ClassifiedLine] = field(default_factory=list)
    has_salutation: bool = False

    def _texts(self, zone: Zone, *kinds: LineKind) -> List[str]:
        return [
            line.text
            for line in self.lines
            if line.zone is zone and (not kinds or line.kind in kinds)
        ]

    @property
    def name(self) -> str:
        names = self._texts(Zone.NAME, LineKind.NAME)
        return names[0] if names else ""

    @property
    def contact_lines(self) -> List[str]:
        return self._texts(Zone.CONTACT, LineKind.CONTACT)

    @property
    def pre_date_lines(self) -> List[str]:
        """Free lines between contact block and salutation (date, company)."""
        return self._texts(Zone.CONTACT, LineKind.PRE_DATE)

    @property
    def body_lines(self) -> List[str]:
        """Body lines including the salutation and blank separators."""
        return self._texts(Zone.BODY)

    @property
    def footer_lines(self) -> List[str]:
        """Non-blank footer lines (closing, then the signing name)."""
        return self._texts(Zone.FOOTER, LineKind.CLOSING, LineKind.FOOTER)

    @property
    def paragraphs(self) -> List[str]:
        """
        Body grouped into blank-line-separated blocks.

        Lines inside a block stay joined by newlines (rendered as line breaks).
        """
        blocks = _PARAGRAPH_BREAK_RE.split("\n".join(self.body_lines))
        return [block.strip() for block in blocks if block.strip()]


def _replay_header_tail_as_body(lines: List[ClassifiedLine]) -> List[ClassifiedLine]:
    """
    Re-scan pre-date and spacing lines from the body state.

    Name and contact lines keep their header classification.
    """
    replayed = []
    zone = Zone.BODY
    for line in lines:
        if line.zone is Zone.NAME or line.kind is LineKind.CONTACT:
            replayed.append(line)
            continue
        zone, reclassified = classify_line(line.text, zone)
        replayed.append(reclassified)
    return replayed


def parse_cover_letter(text: str) -> ParsedCoverLetter:
    """
    Parse a plain-text cover letter into zones.

    Never raises; every line is assigned to a zone.

    Args:
        text: Cover letter text, in any shape

    Returns:
        ParsedCoverLetter

    Example:
        >>> parsed = parse_cover_letter("Jane Doe\\n\\nEmail: j@x.com\\n\\nDear Hiring Manager,\\n\\nHi.")
        >>> parsed.name, parsed.contact_lines, parsed.paragraphs
        ('Jane Doe', ['Email: j@x.com'], ['Dear Hiring Manager,', 'Hi.'])
    """
    zone = Zone.NAME
    classified = []
    for line in (text or "").split("\n"):
        zone, classified_line = classify_line(line, zone)
        classified.append(classified_line)

    has_salutation = any(line.kind is LineKind.SALUTATION for line in classified)
    if zone is Zone.CONTACT:
        classified = _replay_header_tail_as_body(classified)

    return ParsedCoverLetter(lines=classified, has_salutation=has_salutation)
