"""
Resume Document Structure

Defines the structured representation of a resume shared by every context:

- Authoring builds ResumeDocument instances from YAML files, stored snapshots,
  and imported PDFs.
- Rendering lays a ResumeDocument out on pages.
- Scoring evaluates a ResumeDocument for ATS compatibility.

Documents are treated as read-only snapshots by rendering and scoring.
Snapshots serialize to plain dicts (snake_case keys) and round-trip losslessly.
"""

import uuid
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Union

from omegaconf import OmegaConf

SKILL_CATEGORIES = ("technical", "soft", "language", "certification")
SKILL_PROFICIENCIES = ("beginner", "intermediate", "advanced", "expert")

PRESENT_LABEL = "Present"


def new_id() -> str:
    """Fresh identifier for a list entry (UI reconciliation only)."""
    return uuid.uuid4().hex


def _text(value: Any) -> str:
    """Coerce a scalar field to str; absence is always the empty string."""
    if value is None:
        return ""
    return str(value)


def _text_list(values: Any) -> List[str]:
    """Coerce a list field to a list of non-blank strings."""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    return [str(v) for v in values if v is not None and str(v).strip()]


def _pick(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only keys that are fields of the dataclass."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class PersonalInfo:
    """
    Contact header and professional summary.

    All fields are plain strings; missing values are "" (never None).
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""
    summary: str = ""

    def __post_init__(self):
        for f in fields(self):
            setattr(self, f.name, _text(getattr(self, f.name)))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalInfo":
        return cls(**_pick(cls, data or {}))

    def is_blank(self) -> bool:
        return not any(getattr(self, f.name).strip() for f in fields(self))


@dataclass
class Experience:
    """
    One work experience entry.

    Dates are free-form strings and never parsed. A current position has no end
    date: setting current=True clears end_date.
    """

    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: List[str] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.company = _text(self.company)
        self.position = _text(self.position)
        self.start_date = _text(self.start_date)
        self.end_date = _text(self.end_date)
        self.current = bool(self.current)
        self.description = _text_list(self.description)
        self.achievements = _text_list(self.achievements)
        self.id = _text(self.id) or new_id()
        if self.current:
            self.end_date = ""

    @property
    def date_range(self) -> str:
        """Display range, e.g. "2021-03 - Present"."""
        end = PRESENT_LABEL if self.current else self.end_date
        if self.start_date and end:
            return f"{self.start_date} - {end}"
        return self.start_date or end

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        return cls(**_pick(cls, data))


@dataclass
class Education:
    """One education entry. gpa and honors are optional."""

    institution: str = ""
    degree: str = ""
    field_of_study: str = ""
    graduation_date: str = ""
    gpa: str = ""
    honors: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.institution = _text(self.institution)
        self.degree = _text(self.degree)
        self.field_of_study = _text(self.field_of_study)
        self.graduation_date = _text(self.graduation_date)
        self.gpa = _text(self.gpa)
        self.honors = _text_list(self.honors)
        self.id = _text(self.id) or new_id()

    @property
    def title(self) -> str:
        """Display title, e.g. "B.S. in Computer Science"."""
        if self.degree and self.field_of_study:
            return f"{self.degree} in {self.field_of_study}"
        return self.degree or self.field_of_study

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        # "field" is accepted as a shorthand for field_of_study
        if "field" in data and "field_of_study" not in data:
            data = {**data, "field_of_study": data["field"]}
        return cls(**_pick(cls, data))


@dataclass
class Skill:
    """
    One skill with its category and proficiency.

    Raises:
        ValueError: If category or proficiency is not one of the known values
    """

    name: str = ""
    category: str = "technical"
    proficiency: str = "intermediate"
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.name = _text(self.name)
        self.category = _text(self.category).lower()
        self.proficiency = _text(self.proficiency).lower()
        self.id = _text(self.id) or new_id()
        if self.category not in SKILL_CATEGORIES:
            raise ValueError(
                f"Invalid skill category: {self.category!r}. Must be one of {SKILL_CATEGORIES}"
            )
        if self.proficiency not in SKILL_PROFICIENCIES:
            raise ValueError(
                f"Invalid skill proficiency: {self.proficiency!r}. "
                f"Must be one of {SKILL_PROFICIENCIES}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Skill":
        return cls(**_pick(cls, data))


@dataclass
class Project:
    """One project. link is the live demo URL, github the repository URL."""

    name: str = ""
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    link: str = ""
    github: str = ""
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.name = _text(self.name)
        self.description = _text(self.description)
        self.technologies = _text_list(self.technologies)
        self.link = _text(self.link)
        self.github = _text(self.github)
        self.id = _text(self.id) or new_id()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(**_pick(cls, data))


@dataclass
class ResumeDocument:
    """
    Structured representation of a complete resume.

    Attributes:
        personal_info: Contact header and summary
        experience: Work history, in display order
        education: Education entries, in display order
        skills: Skills, in display order (grouped by category when rendered)
        projects: Projects, in display order
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeDocument":
        """
        Build a document from a plain dict snapshot.

        Missing sections become empty lists; missing personal info becomes blank.

        Raises:
            ValueError: If a section is not a list or a skill has an unknown category
        """
        data = data or {}
        for section in ("experience", "education", "skills", "projects"):
            value = data.get(section)
            if value is not None and not isinstance(value, list):
                raise ValueError(f"Invalid resume structure: '{section}' must be a list")

        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personal_info") or {}),
            experience=[Experience.from_dict(e) for e in data.get("experience") or []],
            education=[Education.from_dict(e) for e in data.get("education") or []],
            skills=[Skill.from_dict(s) for s in data.get("skills") or []],
            projects=[Project.from_dict(p) for p in data.get("projects") or []],
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "ResumeDocument":
        """
        Load a document from a YAML (or JSON) file.

        Raises:
            FileNotFoundError: If yaml_path does not exist
            ValueError: If the file does not describe a resume
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Resume file not found: {yaml_path}")

        data = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid resume structure: expected a mapping in {yaml_path}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict snapshot (JSON/YAML serializable)."""
        return {
            "personal_info": {f.name: getattr(self.personal_info, f.name) for f in fields(PersonalInfo)},
            "experience": [_entry_dict(e) for e in self.experience],
            "education": [_entry_dict(e) for e in self.education],
            "skills": [_entry_dict(s) for s in self.skills],
            "projects": [_entry_dict(p) for p in self.projects],
        }

    def is_empty(self) -> bool:
        """True when there is no personal info text and no entries in any section."""
        return (
            self.personal_info.is_blank()
            and not self.experience
            and not self.education
            and not self.skills
            and not self.projects
        )

    def plaintext(self) -> str:
        """
        Concatenated content text used for keyword matching.

        Covers the summary, experience (company, position, bullets), education
        (degree, field of study, institution), skill names, and projects (name,
        description, technologies). Contact details are excluded.
        """
        parts = [self.personal_info.summary]
        for exp in self.experience:
            parts.extend([exp.company, exp.position, *exp.description, *exp.achievements])
        for edu in self.education:
            parts.append(f"{edu.degree} {edu.field_of_study} {edu.institution}")
        parts.extend(skill.name for skill in self.skills)
        for project in self.projects:
            parts.extend([project.name, project.description, *project.technologies])
        return " ".join(parts)


def _entry_dict(entry) -> Dict[str, Any]:
    return {f.name: _copy_value(getattr(entry, f.name)) for f in fields(entry)}


def _copy_value(value):
    return list(value) if isinstance(value, list) else value
