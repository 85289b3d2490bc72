"""
CV Record Structure

Defines the structured representation of the Master CV. This is the shape
persisted by the document store, produced by the AI intake calls, and consumed
by the LaTeX generator.

Every field defaults to an empty value. Loading is tolerant of missing keys,
None values and the camelCase key spelling used by some clients; it only
rejects input that is not shaped like a mapping at all.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from omegaconf import OmegaConf

from mastercv.contexts.templating.exceptions import InvalidCVStructureError
from mastercv.contexts.templating.latex_patterns import SkillCategoryLabels


def _text(value: Any) -> str:
    """Coerce a scalar field to a stripped string (None -> "")."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(_text(item) for item in value if _text(item))
    return str(value).strip()


def _string_list(value: Any, field_path: str) -> List[str]:
    """Coerce a list-of-strings field, dropping blank entries."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        raise InvalidCVStructureError("Expected a list of strings", field_path, value)
    return [_text(item) for item in value if _text(item)]


def _unique_list(value: Any, field_path: str) -> List[str]:
    """Coerce a skill category: comma-separated string or list, de-duplicated in order."""
    if isinstance(value, str):
        value = value.split(",")
    items = _string_list(value, field_path)
    return list(dict.fromkeys(items))


def _get(data: Mapping[str, Any], *keys: str) -> Any:
    """First present key among snake_case/camelCase spellings."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def _mapping(value: Any, field_path: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidCVStructureError("Expected a mapping", field_path, value)
    return value


def _entries(value: Any, field_path: str) -> Iterable[Tuple[str, Mapping[str, Any]]]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidCVStructureError("Expected a list of entries", field_path, value)
    return [(f"{field_path}[{i}]", _mapping(entry, f"{field_path}[{i}]")) for i, entry in enumerate(value)]


@dataclass
class PersonalInfo:
    """Name and contact fields shown in the resume heading."""

    name: str = ""
    phone: str = ""
    email: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersonalInfo":
        return cls(
            name=_text(data.get("name")),
            phone=_text(data.get("phone")),
            email=_text(data.get("email")),
            linkedin=_text(data.get("linkedin")),
            github=_text(data.get("github")),
            website=_text(data.get("website")),
        )


@dataclass
class EducationEntry:
    institution: str = ""
    location: str = ""
    degree: str = ""
    dates: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationEntry":
        return cls(
            institution=_text(data.get("institution")),
            location=_text(data.get("location")),
            degree=_text(data.get("degree")),
            dates=_text(data.get("dates")),
        )


@dataclass
class ExperienceEntry:
    role: str = ""
    company: str = ""
    location: str = ""
    dates: str = ""
    points: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], field_path: str = "experience") -> "ExperienceEntry":
        return cls(
            role=_text(data.get("role")),
            company=_text(data.get("company")),
            location=_text(data.get("location")),
            dates=_text(data.get("dates")),
            points=_string_list(data.get("points"), f"{field_path}.points"),
        )


@dataclass
class ProjectEntry:
    """A project; demo_link, when set, turns the project name into a hyperlink."""

    name: str = ""
    technologies: str = ""
    dates: str = ""
    demo_link: str = ""
    points: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], field_path: str = "projects") -> "ProjectEntry":
        return cls(
            name=_text(data.get("name")),
            technologies=_text(data.get("technologies")),
            dates=_text(data.get("dates")),
            demo_link=_text(_get(data, "demo_link", "demoLink")),
            points=_string_list(data.get("points"), f"{field_path}.points"),
        )


@dataclass
class Skills:
    """Skill categories; each keeps insertion order with duplicates removed."""

    languages: List[str] = field(default_factory=list)
    frameworks: List[str] = field(default_factory=list)
    tools: List[str] = field(default_factory=list)
    libraries: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Skills":
        return cls(
            languages=_unique_list(data.get("languages"), "skills.languages"),
            frameworks=_unique_list(data.get("frameworks"), "skills.frameworks"),
            tools=_unique_list(data.get("tools"), "skills.tools"),
            libraries=_unique_list(data.get("libraries"), "skills.libraries"),
        )

    def labeled_categories(self) -> List[Tuple[str, List[str]]]:
        """Non-empty categories as (display label, values), in display order."""
        return [
            (label, getattr(self, key))
            for key, label in SkillCategoryLabels.ORDER
            if getattr(self, key)
        ]

    @property
    def is_empty(self) -> bool:
        return not self.labeled_categories()


@dataclass
class CVRecord:
    """
    The canonical professional-history record ("Master CV").

    Attributes:
        personal_info: Name and contact fields
        education: Education entries in display order
        experience: Work experience entries in display order
        projects: Project entries in display order
        skills: Skill categories
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    education: List[EducationEntry] = field(default_factory=list)
    experience: List[ExperienceEntry] = field(default_factory=list)
    projects: List[ProjectEntry] = field(default_factory=list)
    skills: Skills = field(default_factory=Skills)

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def empty(cls) -> "CVRecord":
        """Blank record used as the starting point for a new Master CV."""
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CVRecord":
        """
        Build a record from the persisted JSON shape.

        Accepts snake_case or camelCase keys (personal_info/personalInfo,
        demo_link/demoLink). Missing fields and None values become empty.

        Raises:
            InvalidCVStructureError: If data (or a nested section) is not
                shaped like a mapping/list where one is required
        """
        if not isinstance(data, Mapping):
            raise InvalidCVStructureError("CV record must be a mapping", "<root>", data)

        personal = _mapping(_get(data, "personal_info", "personalInfo"), "personal_info")
        skills = _mapping(data.get("skills"), "skills")

        return cls(
            personal_info=PersonalInfo.from_dict(personal),
            education=[
                EducationEntry.from_dict(entry)
                for _, entry in _entries(data.get("education"), "education")
            ],
            experience=[
                ExperienceEntry.from_dict(entry, path)
                for path, entry in _entries(data.get("experience"), "experience")
            ],
            projects=[
                ProjectEntry.from_dict(entry, path)
                for path, entry in _entries(data.get("projects"), "projects")
            ],
            skills=Skills.from_dict(skills),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "CVRecord":
        """Load a record from a YAML file."""
        data = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, json_path: Path) -> "CVRecord":
        """Load a record from a JSON file (the document store's export format)."""
        return cls.from_dict(json.loads(Path(json_path).read_text(encoding="utf-8")))

    @classmethod
    def from_file(cls, path: Path) -> "CVRecord":
        """Load from .json, or YAML for any other suffix."""
        path = Path(path)
        if path.suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    # =========================================================================
    # EXPORT
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Persisted snake_case shape."""
        return asdict(self)

    @property
    def name(self) -> str:
        return self.personal_info.name
