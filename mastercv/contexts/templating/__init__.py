"""
Templating Context

CV record model and CV -> LaTeX generation (Jake's Resume macro set).
"""

from mastercv.contexts.templating.cv_data_structure import (
    CVRecord,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    Skills,
)
from mastercv.contexts.templating.exceptions import InvalidCVStructureError, TemplateRenderError
from mastercv.contexts.templating.latex_generator import CVToLaTeXConverter, generate_latex

__all__ = [
    "CVRecord",
    "CVToLaTeXConverter",
    "EducationEntry",
    "ExperienceEntry",
    "InvalidCVStructureError",
    "PersonalInfo",
    "ProjectEntry",
    "Skills",
    "TemplateRenderError",
    "generate_latex",
]
