"""
Text processing utilities for LaTeX generation.

Escaping rules for user-supplied values and link normalization helpers used
when building contact rows and project links.
"""

import re

# Replacement for every character LaTeX treats specially in running text.
# Applied in a single regex pass, so a replacement is never escaped again.
LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_LATEX_SPECIAL_RE = re.compile("|".join(re.escape(char) for char in LATEX_SPECIAL_CHARS))

# Characters that cannot appear raw inside an \href target
_URL_UNSAFE_RE = re.compile(r'[\s\\{}^~"<>|`]')

_URL_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def escape_latex(text: str) -> str:
    """
    Escape LaTeX special characters in user-supplied text.

    Handles \\ & % $ # _ { } ~ ^. The backslash maps to \\textbackslash{} and is
    never re-escaped by the later brace rules. Text that is already escaped is
    escaped again (a literal \\& becomes \\textbackslash{}\\&).

    Args:
        text: Raw text (None or empty returns "")

    Returns:
        Text safe to embed in LaTeX body content

    Example:
        >>> escape_latex("R&D at 100%")
        'R\\\\&D at 100\\\\%'
    """
    if not text:
        return ""
    return _LATEX_SPECIAL_RE.sub(lambda match: LATEX_SPECIAL_CHARS[match.group(0)], str(text))


def escape_latex_url(url: str) -> str:
    """
    Prepare a URL for use as an \\href target.

    Whitespace, braces, backslashes and similar characters are percent-encoded;
    % and # are then backslash-escaped so the URL survives being passed as a
    macro argument.
    """
    if not url:
        return ""

    def _percent_encode(match: re.Match) -> str:
        return "".join(f"%{byte:02X}" for byte in match.group(0).encode("utf-8"))

    encoded = _URL_UNSAFE_RE.sub(_percent_encode, url.strip())
    return encoded.replace("%", r"\%").replace("#", r"\#")


def ensure_url_scheme(url: str) -> str:
    """Prefix https:// unless the link already starts with http."""
    url = (url or "").strip()
    if not url or url.lower().startswith("http"):
        return url
    return f"https://{url}"


def strip_url_scheme(url: str) -> str:
    """Drop a leading http:// or https:// for display."""
    return _URL_SCHEME_RE.sub("", (url or "").strip())

