"""
LaTeX Pattern Constants

Centralized LaTeX strings used for resume generation and for checking
generated output. Organized into frozen dataclasses by category for
immutability and clear grouping.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DocumentPatterns:
    """Document-level LaTeX markers."""

    BEGIN_DOCUMENT: str = r"\begin{document}"
    END_DOCUMENT: str = r"\end{document}"
    CLOSING_RULE: str = "%-------------------------------------------"


@dataclass(frozen=True)
class SectionPatterns:
    """
    Section headings in emission order.

    Each section is preceded by a banner comment (e.g., %-----------EDUCATION-----------).
    """

    EDUCATION: str = r"\section{Education}"
    EXPERIENCE: str = r"\section{Experience}"
    PROJECTS: str = r"\section{Projects}"
    SKILLS: str = r"\section{Technical Skills}"
    SECTION_PREFIX: str = r"\section{"


@dataclass(frozen=True)
class MacroPatterns:
    """Resume macros defined in the preamble."""

    SUBHEADING: str = r"\resumeSubheading"
    PROJECT_HEADING: str = r"\resumeProjectHeading"
    ITEM: str = r"\resumeItem{"
    ITEM_LIST_START: str = r"\resumeItemListStart"
    ITEM_LIST_END: str = r"\resumeItemListEnd"
    SUBHEADING_LIST_START: str = r"\resumeSubHeadingListStart"
    SUBHEADING_LIST_END: str = r"\resumeSubHeadingListEnd"
    HREF: str = r"\href{"


@dataclass(frozen=True)
class ContactFieldPatterns:
    """
    Heading contact fields in display order.

    LINK_FIELDS get an https:// scheme when missing and are shown without it.
    """

    ORDER: Tuple[str, ...] = ("phone", "email", "linkedin", "github", "website")
    LINK_FIELDS: Tuple[str, ...] = ("linkedin", "github", "website")
    MAILTO_PREFIX: str = "mailto:"
    SEPARATOR: str = " $|$ "


@dataclass(frozen=True)
class SkillCategoryLabels:
    """Display labels for skill categories, in emission order."""

    ORDER: Tuple[Tuple[str, str], ...] = (
        ("languages", "Languages"),
        ("frameworks", "Frameworks"),
        ("tools", "Developer Tools"),
        ("libraries", "Libraries"),
    )
