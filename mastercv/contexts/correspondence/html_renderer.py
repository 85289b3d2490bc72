"""
Cover Letter HTML Renderer

Renders a parsed cover letter as a standalone, print-ready HTML page. All
letter text is HTML-escaped by the template environment; only the fixed page
markup is emitted raw.
"""

from dataclasses import asdict, dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from mastercv.contexts.correspondence.letter_parser import parse_cover_letter
from mastercv.contexts.correspondence.logger import log_parse_summary

TEMPLATE_PATH = Path(__file__).resolve().parent / "template"
TEMPLATE_NAME = "cover_letter.html.jinja"


@dataclass(frozen=True)
class HtmlTheme:
    """Page colors."""

    background: str
    text: str
    muted: str
    divider: str


LIGHT_THEME = HtmlTheme(background="#ffffff", text="#1a1a1a", muted="#555555", divider="#cccccc")
DARK_THEME = HtmlTheme(background="#1a1a2e", text="#e2e2e2", muted="#aaaaaa", divider="#444444")

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_PATH)),
    undefined=StrictUndefined,
    autoescape=True,
    keep_trailing_newline=True,
)


def render_cover_letter_html(text: str, dark: bool = False) -> str:
    """
    Render cover letter text as a full HTML document.

    Args:
        text: Cover letter text, in any shape
        dark: Use the dark color scheme

    Returns:
        HTML document string
    """
    letter = parse_cover_letter(text)
    log_parse_summary(letter)

    theme = DARK_THEME if dark else LIGHT_THEME
    paragraphs = [paragraph.split("\n") for paragraph in letter.paragraphs]
    return _env.get_template(TEMPLATE_NAME).render(
        letter=letter, paragraphs=paragraphs, theme=asdict(theme)
    )
