"""
LaTeX Generator

Converts a CV record to a complete LaTeX document using the Jake's Resume
macro set. Output is a pure function of the record: the same input always
produces byte-identical LaTeX.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from jinja2 import TemplateError

from mastercv.contexts.templating.cv_data_structure import (
    CVRecord,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    Skills,
)
from mastercv.contexts.templating.exceptions import TemplateRenderError
from mastercv.contexts.templating.latex_patterns import ContactFieldPatterns
from mastercv.contexts.templating.logger import _log_debug
from mastercv.contexts.templating.registries import TemplateRegistry, latex_url
from mastercv.utils.text_processing import escape_latex_url, strip_url_scheme


class CVToLaTeXConverter:
    """Converts a CVRecord to LaTeX format."""

    def __init__(self, template_registry: TemplateRegistry = None):
        self.template_registry = template_registry or TemplateRegistry()

    def _render(self, type_name: str, **context: Any) -> str:
        """Render a section template, wrapping Jinja2 failures with the template location."""
        try:
            return self.template_registry.get_template(type_name).render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render {type_name} section",
                type_name=type_name,
                template_path=self.template_registry.get_template_path(type_name),
                original_error=e,
            ) from e

    def generate_preamble(self) -> str:
        """Static preamble (document class, packages, resume macros)."""
        return self.template_registry.get_asset("preamble.tex")

    def _generate_contact_items(self, personal_info: PersonalInfo) -> List[Dict[str, Optional[str]]]:
        """
        Build heading contact items in display order, skipping empty fields.

        Each item has a display value (escaped by the template) and an optional
        href that is already a safe \\href target.
        """
        items = []
        for field_name in ContactFieldPatterns.ORDER:
            value = getattr(personal_info, field_name)
            if not value:
                continue

            if field_name == "email":
                href = ContactFieldPatterns.MAILTO_PREFIX + escape_latex_url(value)
                display = value
            elif field_name in ContactFieldPatterns.LINK_FIELDS:
                href = latex_url(value)
                display = strip_url_scheme(value)
            else:
                href = None
                display = value

            items.append({"href": href, "display": display})
        return items

    def generate_heading(self, personal_info: PersonalInfo) -> str:
        """
        Generate \\begin{document} and the centered name/contact block.

        An empty name produces an empty name line rather than a placeholder.
        """
        template = self.template_registry.get_structure_template("heading")
        return template.render(
            name=personal_info.name,
            contacts=self._generate_contact_items(personal_info),
            separator=ContactFieldPatterns.SEPARATOR,
        )

    def convert_education(self, entries: List[EducationEntry]) -> str:
        """
        Convert education entries to LaTeX.

        Returns:
            LaTeX for the Education section, or "" when there are no entries
        """
        if not entries:
            return ""
        return self._render("education", entries=entries)

    def convert_experience(self, entries: List[ExperienceEntry]) -> str:
        """
        Convert experience entries to LaTeX.

        Every entry gets an item list, even when it has no points.

        Returns:
            LaTeX for the Experience section, or "" when there are no entries
        """
        if not entries:
            return ""
        return self._render("experience", entries=entries)

    def convert_projects(self, entries: List[ProjectEntry]) -> str:
        """
        Convert project entries to LaTeX.

        The project name links to demo_link when one is set.
        """
        if not entries:
            return ""
        return self._render("projects", entries=entries)

    def convert_skills(self, skills: Skills) -> str:
        """Convert skills to a single itemized block; "" when every category is empty."""
        categories = skills.labeled_categories()
        if not categories:
            return ""
        return self._render("skills", categories=categories)

    def generate_document(self, cv: CVRecord) -> str:
        """
        Generate complete LaTeX document from a CV record.

        Order: preamble, heading, Education, Experience, Projects, Technical
        Skills, closing marker. Sections with no content are omitted. Field values
        are escaped but otherwise emitted as given, line breaks included, and
        the document ends at \\end{document} with no trailing newline.

        Args:
            cv: CV record

        Returns:
            Complete LaTeX document string
        """
        sections = [
            self.convert_education(cv.education),
            self.convert_experience(cv.experience),
            self.convert_projects(cv.projects),
            self.convert_skills(cv.skills),
        ]
        rendered_sections = [section for section in sections if section]
        _log_debug(f"Rendered {len(rendered_sections)} of {len(sections)} sections")

        document_template = self.template_registry.get_structure_template("document")
        return document_template.render(
            preamble=self.generate_preamble(),
            heading=self.generate_heading(cv.personal_info),
            sections=rendered_sections,
        )


_default_converter: Optional[CVToLaTeXConverter] = None


def generate_latex(cv: Union[CVRecord, Mapping[str, Any]]) -> str:
    """
    Convert a CV record (or its persisted dict shape) to a LaTeX document.

    Raises:
        InvalidCVStructureError: If cv is neither a CVRecord nor a mapping
    """
    global _default_converter
    if _default_converter is None:
        _default_converter = CVToLaTeXConverter()

    if not isinstance(cv, CVRecord):
        cv = CVRecord.from_dict(cv)
    return _default_converter.generate_document(cv)
