"""
Local structural heuristics for ATS scoring.

Five sub-scores in [0, 100], computed from the document alone (plus the
keyword list from the remote judgment). Pure arithmetic over in-memory data:
nothing here raises or performs I/O.
"""

import re
from dataclasses import asdict, dataclass
from typing import Dict, List

from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# A digit, percent sign, or currency sign marks a quantified achievement
QUANTIFIED_PATTERN = re.compile(r"[\d%$€£¥₹]")

EDUCATION_FIELD_KEYWORDS = ("computer science", "engineering", "business", "marketing", "design")

# Keyword coverage when the remote judgment suggests no keywords
DEFAULT_KEYWORD_SCORE = 60

SCORE_WEIGHTS = {
    "keywords": 0.30,
    "formatting": 0.20,
    "experience": 0.25,
    "education": 0.10,
    "skills": 0.15,
}

MISSING_KEYWORDS_LIMIT = 10


@dataclass(frozen=True)
class LocalBreakdown:
    """Unadjusted local sub-scores, each in [0, 100]."""

    keywords: float
    formatting: float
    experience: float
    education: float
    skills: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def score_formatting(document: ResumeDocument) -> int:
    """
    Start at 100 and deduct for missing essentials.

    -10 no email, -10 no phone, -20 no experience, -15 no skills,
    -5 email present but malformed. Floors at 0.
    """
    info = document.personal_info
    score = 100
    if not info.email:
        score -= 10
    if not info.phone:
        score -= 10
    if not document.experience:
        score -= 20
    if not document.skills:
        score -= 15
    if info.email and not EMAIL_PATTERN.match(info.email):
        score -= 5
    return max(score, 0)


def score_experience(document: ResumeDocument) -> int:
    """
    0 without entries; else 60, +15 for 2+ entries, +10 more for 3+, and +15
    if any achievement is quantified. Caps at 100.
    """
    entries = document.experience
    if not entries:
        return 0

    score = 60
    if len(entries) >= 2:
        score += 15
    if len(entries) >= 3:
        score += 10
    if any(QUANTIFIED_PATTERN.search(a) for exp in entries for a in exp.achievements):
        score += 15
    return min(score, 100)


def score_education(document: ResumeDocument) -> int:
    """50 without entries (education is optional); else 80, +20 for a recognized field."""
    if not document.education:
        return 50

    score = 80
    if any(
        keyword in edu.field_of_study.lower()
        for edu in document.education
        for keyword in EDUCATION_FIELD_KEYWORDS
    ):
        score += 20
    return min(score, 100)


def score_skills(document: ResumeDocument) -> int:
    """0 without entries; else 50, +10 per distinct category, +20 if any technical skill."""
    if not document.skills:
        return 0

    categories = {skill.category for skill in document.skills}
    score = 50 + 10 * len(categories)
    if "technical" in categories:
        score += 20
    return min(score, 100)


def _contains(text_lower: str, keyword: str) -> bool:
    return keyword.lower() in text_lower


def score_keyword_coverage(keywords: List[str], text: str) -> float:
    """Percentage of keywords found (case-insensitive substring) in text; 60 if there are none."""
    if not keywords:
        return DEFAULT_KEYWORD_SCORE
    text_lower = text.lower()
    found = sum(1 for keyword in keywords if _contains(text_lower, keyword))
    return min(found / len(keywords) * 100, 100)


def find_missing_keywords(
    keywords: List[str], text: str, limit: int = MISSING_KEYWORDS_LIMIT
) -> List[str]:
    """
    Keywords not found in text, in their original order, truncated to limit.

    Example:
        >>> find_missing_keywords(["Python", "Docker", "Kubernetes"], "python developer")
        ['Docker', 'Kubernetes']
    """
    text_lower = text.lower()
    return [keyword for keyword in keywords if not _contains(text_lower, keyword)][:limit]


def compute_local_breakdown(document: ResumeDocument, keywords: List[str]) -> LocalBreakdown:
    """All five local sub-scores for a document."""
    return LocalBreakdown(
        keywords=score_keyword_coverage(keywords, document.plaintext()),
        formatting=score_formatting(document),
        experience=score_experience(document),
        education=score_education(document),
        skills=score_skills(document),
    )


def weighted_average(breakdown: LocalBreakdown) -> float:
    """0.30·keywords + 0.20·formatting + 0.25·experience + 0.10·education + 0.15·skills"""
    values = breakdown.as_dict()
    return sum(weight * values[name] for name, weight in SCORE_WEIGHTS.items())
