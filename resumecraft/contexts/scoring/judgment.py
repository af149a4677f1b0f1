"""
Remote ATS judgment.

Asks a language model for an overall ATS score, recommended keywords, and
improvement suggestions. The response is validated strictly: anything that does
not match {score: number, keywords: [str], suggestions: [str], analysis?: str}
is rejected, never patched up with defaults.
"""

import json
import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.contexts.scoring.exceptions import RemoteJudgmentError
from resumecraft.contexts.scoring.logger import _log_debug, _log_info, log_judgment_failure
from resumecraft.utils.grouping import group_by
from resumecraft.utils.llm import LLMProvider, get_provider, load_json_payload
from resumecraft.utils.remote_errors import describe_remote_error

JUDGMENT_MAX_TOKENS = 1200
JUDGMENT_TEMPERATURE = 0.3

MAX_KEYWORDS = 15
MAX_SUGGESTIONS = 8

NO_RESPONSE_MESSAGE = "No response received from the AI service."
PARSE_FAILURE_MESSAGE = "Failed to parse AI analysis response"

_JUDGMENT_SYSTEM_PROMPT = """\
You are an expert ATS (Applicant Tracking System) analyzer with deep knowledge of how
modern recruitment software processes and ranks resumes.

Evaluate the resume on:
1. KEYWORD OPTIMIZATION (30%): industry keywords, job-specific skills and tools, action verbs
2. FORMATTING & STRUCTURE (25%): ATS-readable sections, headers, consistency
3. CONTENT QUALITY (25%): quantified achievements, relevant experience, progression
4. COMPLETENESS (20%): contact information, summary, dated work history, education

Scoring: 90-100 exceptional, 80-89 excellent, 70-79 good, 60-69 fair, 50-59 poor,
below 50 critical.

Respond with valid JSON only, in exactly this structure:
{
  "score": <number between 0 and 100>,
  "analysis": "<2-3 sentence analysis of strengths and key issues>",
  "suggestions": ["<specific actionable improvement>", ...],
  "keywords": ["<relevant keyword>", ...]
}
Provide 5-8 suggestions and 8-15 keywords."""

_JOB_CONTEXT_TEMPLATE = """\
TARGET JOB DESCRIPTION:
{job_description}

ADDITIONAL CONTEXT: This resume will be evaluated against the specific job requirements
above. Pay special attention to matching keywords, required skills, and experience levels
mentioned in the job description.

"""

_JUDGMENT_USER_PROMPT_TEMPLATE = """\
Analyze this resume for ATS compatibility and optimization opportunities.

RESUME TO ANALYZE:
{resume_text}

{job_context}ANALYSIS REQUIREMENTS:
1. Evaluate against the 4 key ATS dimensions (keywords, formatting, content quality, completeness)
2. Provide an overall score (0-100) based on the scoring methodology
3. Give specific, actionable improvement suggestions
4. Identify relevant keywords that should be included
5. Consider both ATS technical parsing and human recruiter appeal

Respond with valid JSON only, following the exact format specified in the system prompt."""


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class RemoteJudgment:
    """
    Validated remote judgment.

    Attributes:
        score: Overall score, clamped to [0, 100]
        keywords: Recommended keywords (at most 15)
        suggestions: Improvement suggestions (at most 8)
        analysis: Short free-text analysis ("" if the model gave none)
    """

    score: float
    keywords: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    analysis: str = ""


@dataclass(frozen=True)
class JudgmentParsed:
    """Parse succeeded."""

    judgment: RemoteJudgment


@dataclass(frozen=True)
class JudgmentRejected:
    """Parse failed; reason says which check rejected the response."""

    reason: str


JudgmentParseResult = Union[JudgmentParsed, JudgmentRejected]


# =============================================================================
# PROMPT CONSTRUCTION
# =============================================================================


def serialize_for_judgment(document: ResumeDocument) -> str:
    """Plain-text rendering of a resume, section by section, for the judgment prompt."""
    info = document.personal_info
    sections = [
        "=== CONTACT INFORMATION ===",
        f"Name: {info.full_name or 'Not provided'}",
        f"Email: {info.email or 'Not provided'}",
        f"Phone: {info.phone or 'Not provided'}",
        f"Location: {info.location or 'Not provided'}",
    ]
    if info.linkedin:
        sections.append(f"LinkedIn: {info.linkedin}")
    if info.github:
        sections.append(f"GitHub: {info.github}")
    if info.website:
        sections.append(f"Website: {info.website}")

    if info.summary:
        sections.extend(["\n=== PROFESSIONAL SUMMARY ===", info.summary])

    if document.experience:
        sections.append("\n=== WORK EXPERIENCE ===")
        for i, exp in enumerate(document.experience, 1):
            sections.append(f"\n{i}. {exp.position} at {exp.company}")
            sections.append(f"   Duration: {exp.date_range}")
            if exp.description:
                sections.append("   Responsibilities:")
                sections.extend(f"   • {desc}" for desc in exp.description)
            if exp.achievements:
                sections.append("   Key Achievements:")
                sections.extend(f"   • {achievement}" for achievement in exp.achievements)

    if document.education:
        sections.append("\n=== EDUCATION ===")
        for i, edu in enumerate(document.education, 1):
            sections.append(f"{i}. {edu.title}")
            sections.append(f"   Institution: {edu.institution}")
            sections.append(f"   Graduation: {edu.graduation_date}")
            if edu.gpa:
                sections.append(f"   GPA: {edu.gpa}")
            if edu.honors:
                sections.append(f"   Honors: {', '.join(edu.honors)}")

    if document.skills:
        sections.append("\n=== SKILLS ===")
        for category, skills in group_by(document.skills, key=lambda s: s.category).items():
            listed = ", ".join(f"{s.name} ({s.proficiency})" for s in skills)
            sections.append(f"{category.capitalize()}: {listed}")

    if document.projects:
        sections.append("\n=== PROJECTS ===")
        for i, project in enumerate(document.projects, 1):
            sections.append(f"\n{i}. {project.name}")
            sections.append(f"   Description: {project.description}")
            if project.technologies:
                sections.append(f"   Technologies: {', '.join(project.technologies)}")
            if project.link:
                sections.append(f"   Live Demo: {project.link}")
            if project.github:
                sections.append(f"   GitHub: {project.github}")

    return "\n".join(sections)


def build_judgment_prompt(resume_text: str, job_description: Optional[str] = None) -> str:
    """User prompt for the judgment call; the job description section is included only when given."""
    job_context = ""
    if job_description and job_description.strip():
        job_context = _JOB_CONTEXT_TEMPLATE.format(job_description=job_description.strip())
    return _JUDGMENT_USER_PROMPT_TEMPLATE.format(resume_text=resume_text, job_context=job_context)


# =============================================================================
# RESPONSE PARSING
# =============================================================================


def _is_string_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _as_finite_score(value) -> Optional[float]:
    # bool is an int subclass; true/false is not a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        score = float(value)
    except OverflowError:
        return None
    return score if math.isfinite(score) else None


def parse_judgment_response(text: str) -> JudgmentParseResult:
    """
    Strictly validate a judgment response.

    Code fences around the JSON are tolerated. The score is clamped to
    [0, 100]; keywords are capped at 15 and suggestions at 8.

    Returns:
        JudgmentParsed on success, JudgmentRejected naming the failed check otherwise

    Example:
        >>> parse_judgment_response('{"score": 140, "keywords": [], "suggestions": []}')
        JudgmentParsed(judgment=RemoteJudgment(score=100.0, keywords=[], suggestions=[], analysis=''))
    """
    try:
        payload = load_json_payload(text)
    except json.JSONDecodeError:
        return JudgmentRejected("response is not valid JSON")

    if not isinstance(payload, dict):
        return JudgmentRejected("response is not a JSON object")

    score = _as_finite_score(payload.get("score"))
    if score is None:
        return JudgmentRejected("'score' is missing or not a finite number")

    for key in ("keywords", "suggestions"):
        if not _is_string_list(payload.get(key)):
            return JudgmentRejected(f"'{key}' is missing or not a list of strings")

    analysis = payload.get("analysis", "")
    if not isinstance(analysis, str):
        return JudgmentRejected("'analysis' is not a string")

    return JudgmentParsed(
        RemoteJudgment(
            score=min(max(score, 0.0), 100.0),
            keywords=payload["keywords"][:MAX_KEYWORDS],
            suggestions=payload["suggestions"][:MAX_SUGGESTIONS],
            analysis=analysis,
        )
    )


# =============================================================================
# REMOTE CALL
# =============================================================================


def request_judgment(
    document: ResumeDocument,
    job_description: Optional[str] = None,
    provider: Optional[LLMProvider] = None,
) -> RemoteJudgment:
    """
    Obtain a validated ATS judgment for a document.

    No retry is attempted; the first failure is reported.

    Args:
        document: Resume to judge
        job_description: Optional job posting text to judge against
        provider: LLM provider (default: get_provider() from LLM_PROVIDER / LLM_MODEL)

    Returns:
        RemoteJudgment

    Raises:
        RemoteJudgmentError: Provider failure (with a classified message) or invalid response
    """
    user_prompt = build_judgment_prompt(serialize_for_judgment(document), job_description)

    try:
        llm = provider or get_provider()
        _log_info(f"Requesting ATS judgment from {llm.name}")
        response = llm.generate(
            system_prompt=_JUDGMENT_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_tokens=JUDGMENT_MAX_TOKENS,
            temperature=JUDGMENT_TEMPERATURE,
        )
    except Exception as e:
        message = describe_remote_error(e)
        log_judgment_failure(message, e)
        raise RemoteJudgmentError(message, original_error=e) from e

    if not response.content.strip():
        log_judgment_failure(NO_RESPONSE_MESSAGE)
        raise RemoteJudgmentError(NO_RESPONSE_MESSAGE)

    result = parse_judgment_response(response.content)
    if isinstance(result, JudgmentRejected):
        message = f"{PARSE_FAILURE_MESSAGE}: {result.reason}"
        log_judgment_failure(message)
        _log_debug(f"  Raw response: {response.content[:500]}")
        raise RemoteJudgmentError(message)

    _log_debug(
        f"  Judgment: score={result.judgment.score}, "
        f"{len(result.judgment.keywords)} keywords, {len(result.judgment.suggestions)} suggestions"
    )
    return result.judgment
