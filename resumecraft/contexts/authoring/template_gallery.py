"""
Starter template gallery.

Prefilled example resumes that a user can browse, search, and start a new
document from. Each template is one YAML file in TEMPLATES_PATH:

    id: software-engineer-senior
    name: Senior Software Engineer
    description: ...
    category: technology
    level: senior
    preview: ...
    tags: [Python, Leadership]
    resume:
      personal_info: {...}
      experience: [...]

Starting from a template blanks the example person's contact details (the
summary is kept as a writing aid) and gives every entry a fresh id.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from resumecraft.contexts.authoring.exceptions import TemplateNotFoundError
from resumecraft.contexts.authoring.logger import _log_debug, _log_info
from resumecraft.contexts.authoring.resume_data_structure import (
    PersonalInfo,
    ResumeDocument,
    new_id,
)

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("TEMPLATES_PATH", "data/templates"))

TEMPLATE_CATEGORIES = ("technology", "business", "creative", "healthcare", "education")
TEMPLATE_LEVELS = ("entry", "mid", "senior", "executive")

# Contact fields blanked when a template is instantiated
PERSONAL_FIELDS = tuple(f.name for f in fields(PersonalInfo) if f.name != "summary")


@dataclass
class StarterTemplate:
    """One gallery entry: metadata plus the example resume snapshot."""

    id: str
    name: str
    description: str
    category: str
    level: str
    preview: str = ""
    tags: List[str] = field(default_factory=list)
    resume: Dict[str, Any] = field(default_factory=dict)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, description, or any tag."""
        query = query.strip().lower()
        if not query:
            return True
        haystack = [self.name, self.description, *self.tags]
        return any(query in text.lower() for text in haystack)


def _load_template(path: Path) -> StarterTemplate:
    data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    if not isinstance(data, dict):
        raise ValueError(f"Invalid template: expected a mapping in {path}")

    missing = [key for key in ("id", "name", "description", "category", "level") if not data.get(key)]
    if missing:
        raise ValueError(f"Invalid template {path.name}: missing {missing}")
    if data["category"] not in TEMPLATE_CATEGORIES:
        raise ValueError(
            f"Invalid template {path.name}: category {data['category']!r} "
            f"must be one of {TEMPLATE_CATEGORIES}"
        )
    if data["level"] not in TEMPLATE_LEVELS:
        raise ValueError(
            f"Invalid template {path.name}: level {data['level']!r} must be one of {TEMPLATE_LEVELS}"
        )

    template = StarterTemplate(
        id=str(data["id"]),
        name=str(data["name"]),
        description=str(data["description"]),
        category=data["category"],
        level=data["level"],
        preview=str(data.get("preview") or ""),
        tags=[str(tag) for tag in data.get("tags") or []],
        resume=data.get("resume") or {},
    )
    # Resume data must parse as a document
    ResumeDocument.from_dict(template.resume)
    return template


class TemplateGallery:
    """
    Registry of starter templates loaded from a directory of YAML files.

    Templates are read on first access and cached; listing order is by file name.
    """

    def __init__(self, templates_path: Path = None):
        """
        Args:
            templates_path: Directory of template YAML files (default: TEMPLATES_PATH)
        """
        self.templates_path = Path(templates_path or TEMPLATES_PATH)
        self._cache: Optional[Dict[str, StarterTemplate]] = None

    def _templates(self) -> Dict[str, StarterTemplate]:
        if self._cache is not None:
            return self._cache

        if not self.templates_path.is_dir():
            raise FileNotFoundError(f"Template directory not found: {self.templates_path}")

        templates: Dict[str, StarterTemplate] = {}
        for path in sorted(self.templates_path.glob("*.yaml")):
            template = _load_template(path)
            if template.id in templates:
                raise ValueError(f"Duplicate template id {template.id!r} in {path.name}")
            templates[template.id] = template

        _log_debug(f"Loaded {len(templates)} starter template(s) from {self.templates_path}")
        self._cache = templates
        return templates

    def list(self) -> List[StarterTemplate]:
        return list(self._templates().values())

    def get(self, template_id: str) -> StarterTemplate:
        """
        Raises:
            TemplateNotFoundError: If no template has this id
        """
        try:
            return self._templates()[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id) from None

    def filter(
        self,
        query: str = "",
        category: Optional[str] = None,
        level: Optional[str] = None,
    ) -> List[StarterTemplate]:
        """
        Search and filter the gallery.

        Args:
            query: Free text matched against name, description, and tags
            category: Keep only this category (None or "all" keeps every category)
            level: Keep only this level (None or "all" keeps every level)

        Raises:
            ValueError: If category or level is not a known value
        """
        if category in (None, "all"):
            category = None
        elif category not in TEMPLATE_CATEGORIES:
            raise ValueError(f"Unknown template category: {category!r}. Must be one of {TEMPLATE_CATEGORIES}")
        if level in (None, "all"):
            level = None
        elif level not in TEMPLATE_LEVELS:
            raise ValueError(f"Unknown template level: {level!r}. Must be one of {TEMPLATE_LEVELS}")

        return [
            template
            for template in self.list()
            if template.matches(query)
            and (category is None or template.category == category)
            and (level is None or template.level == level)
        ]

    def instantiate(self, template_id: str) -> ResumeDocument:
        """
        Start a new document from a template.

        The example person's contact details are cleared and every entry gets a
        new id, so two documents started from the same template share no ids.

        Raises:
            TemplateNotFoundError: If no template has this id
        """
        template = self.get(template_id)
        document = ResumeDocument.from_dict(template.resume)

        for name in PERSONAL_FIELDS:
            setattr(document.personal_info, name, "")
        for entry in [*document.experience, *document.education, *document.skills, *document.projects]:
            entry.id = new_id()

        _log_info(f"Started resume from template '{template.id}'")
        return document

    def clear_cache(self) -> None:
        self._cache = None
