"""
Templating Registries

Centralized registry for loading and caching the Jinja2 templates and static
assets used for LaTeX generation.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from mastercv.utils.text_processing import ensure_url_scheme, escape_latex, escape_latex_url

load_dotenv()
TEMPLATING_CONTEXT_PATH = Path(
    os.getenv("TEMPLATING_CONTEXT_PATH", str(Path(__file__).resolve().parent))
)


def latex_url(url: str) -> str:
    """Jinja filter: normalized, escaped \\href target."""
    return escape_latex_url(ensure_url_scheme(url))


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Section templates are stored in template/types/{type_name}/template.tex.jinja,
    document structure in template/structure/. Custom delimiters avoid conflicts
    with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Filters:
    - latex: escape user text for LaTeX body content
    - url: normalize and escape a link for use as an \\href target
    """

    def __init__(self, context_path: Path = None):
        """
        Initialize the template registry.

        Args:
            context_path: Templating context directory containing template/.
                          Defaults to TEMPLATING_CONTEXT_PATH from environment
        """
        if context_path is None:
            context_path = TEMPLATING_CONTEXT_PATH

        self.template_base_path = Path(context_path) / "template"
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_base_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Preserve whitespace (important for LaTeX)
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
        )
        self.env.filters["latex"] = escape_latex
        self.env.filters["url"] = latex_url

    def _load(self, relative_path: str) -> Template:
        if relative_path in self._cache:
            return self._cache[relative_path]

        try:
            template = self.env.get_template(relative_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found at {self.template_base_path / relative_path}"
            ) from e

        self._cache[relative_path] = template
        return template

    def get_template(self, type_name: str) -> Template:
        """
        Get a section template by type name, loading and caching it if necessary.

        Args:
            type_name: Name of the type (e.g., 'experience')

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        return self._load(f"types/{type_name}/template.tex.jinja")

    def get_structure_template(self, name: str) -> Template:
        """Get a document structure template (e.g., 'heading' -> structure/heading.tex.jinja)."""
        return self._load(f"structure/{name}.tex.jinja")

    def get_template_path(self, type_name: str) -> Path:
        """Get the file path for a type's template."""
        return self.template_base_path / "types" / type_name / "template.tex.jinja"

    def get_asset(self, name: str) -> str:
        """
        Read a static structure asset verbatim (never rendered).

        Args:
            name: File name under template/structure/ (e.g., 'preamble.tex')
        """
        return (self.template_base_path / "structure" / name).read_text(encoding="utf-8")

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, type_name: str) -> bool:
        """Check if a section template is in the cache."""
        return f"types/{type_name}/template.tex.jinja" in self._cache
