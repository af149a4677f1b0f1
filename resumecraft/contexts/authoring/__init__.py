"""
Authoring Context

Responsibilities:
- Owns the ResumeDocument data model and its snapshot format
- Persists snapshots in the record store (keyed by record id and owner id)
- Imports uploaded PDF resumes into structured data
- Provides AI-assisted editing (advice, section rewriting)
- Offers a gallery of starter templates to begin a new resume from

Owns: Resume data model, record store, import, AI-assisted editing, starter templates
Never: Lays out pages or computes scores
"""

from resumecraft.contexts.authoring.exceptions import (
    AssistantError,
    RecordNotFoundError,
    TemplateNotFoundError,
    UploadValidationError,
)
from resumecraft.contexts.authoring.resume_data_structure import (
    Education,
    Experience,
    PersonalInfo,
    Project,
    ResumeDocument,
    Skill,
)
from resumecraft.contexts.authoring.resume_store import ResumeStore, StoredResume
from resumecraft.contexts.authoring.template_gallery import StarterTemplate, TemplateGallery

__all__ = [
    # Data structure classes
    "ResumeDocument",
    "PersonalInfo",
    "Experience",
    "Education",
    "Skill",
    "Project",
    # Record store
    "ResumeStore",
    "StoredResume",
    # Starter templates
    "TemplateGallery",
    "StarterTemplate",
    # Errors
    "AssistantError",
    "RecordNotFoundError",
    "TemplateNotFoundError",
    "UploadValidationError",
]
