"""
AI-assisted resume editing.

Career advice grounded in the current resume, and rewriting of a single
section. Failures are surfaced to the caller as AssistantError with a stable
message; there is no local substitute for the AI response.
"""

from typing import List, Optional

from resumecraft.contexts.authoring.exceptions import AssistantError
from resumecraft.contexts.authoring.logger import _log_debug, log_assistant_failure
from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.utils.grouping import group_by
from resumecraft.utils.llm import LLMProvider, get_provider
from resumecraft.utils.remote_errors import describe_remote_error

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_ADVICE_SYSTEM_PROMPT = """\
You are an expert resume consultant and career advisor who helps job seekers write
ATS-optimized resumes that land interviews.

- Assess the current resume content and career level before advising.
- Give specific, actionable advice with concrete example phrasing.
- Keep every suggestion compatible with Applicant Tracking Systems.
- Push for quantified achievements: action verb + what was done + measurable result.
- Never suggest inventing experience or credentials.
- Be encouraging but direct, concise but complete."""

_ADVICE_USER_PROMPT_TEMPLATE = """\
Current resume:
{context}

---
Question:
{message}"""

_IMPROVE_SYSTEM_PROMPT = """\
You are a resume writing assistant. Rewrite resume content to be more professional,
impactful, and ATS-friendly. Keep facts unchanged. Reply with the rewritten content only."""

_IMPROVE_USER_PROMPT_TEMPLATE = """\
Please improve this {section} section of a resume:

{content}

Provide only the improved version without explanations."""

ADVICE_MAX_TOKENS = 1000
ADVICE_TEMPERATURE = 0.7

CATEGORY_NAMES = {
    "technical": "Technical",
    "soft": "Soft",
    "language": "Language",
    "certification": "Certification",
}


def build_resume_context(document: ResumeDocument) -> str:
    """
    Summarize a resume for use as prompt context.

    Includes at most two responsibilities and two achievements per role and the
    first 100 characters of each project description. Empty sections are
    reported as "None listed".
    """
    info = document.personal_info
    context: List[str] = []

    if info.full_name:
        context.append(f"Name: {info.full_name}")
    if info.summary:
        context.append(f"Professional Summary: {info.summary}")

    if document.experience:
        context.append(f"\nWORK EXPERIENCE ({len(document.experience)} positions):")
        for i, exp in enumerate(document.experience, 1):
            context.append(f"{i}. {exp.position} at {exp.company} ({exp.date_range})")
            if exp.description:
                context.append(f"   Responsibilities: {'; '.join(exp.description[:2])}")
            if exp.achievements:
                context.append(f"   Key Achievements: {'; '.join(exp.achievements[:2])}")
    else:
        context.append("\nWORK EXPERIENCE: None listed")

    if document.skills:
        context.append("\nSKILLS:")
        for category, skills in group_by(document.skills, key=lambda s: s.category).items():
            listed = ", ".join(f"{s.name} ({s.proficiency})" for s in skills)
            context.append(f"{CATEGORY_NAMES[category]}: {listed}")
    else:
        context.append("\nSKILLS: None listed")

    if document.education:
        context.append("\nEDUCATION:")
        for edu in document.education:
            context.append(f"{edu.title} from {edu.institution} ({edu.graduation_date})")
            if edu.gpa:
                context.append(f"  GPA: {edu.gpa}")
            if edu.honors:
                context.append(f"  Honors: {', '.join(edu.honors)}")
    else:
        context.append("\nEDUCATION: None listed")

    if document.projects:
        context.append(f"\nPROJECTS ({len(document.projects)} projects):")
        for i, project in enumerate(document.projects, 1):
            context.append(f"{i}. {project.name}: {project.description[:100]}")
            if project.technologies:
                context.append(f"   Technologies: {', '.join(project.technologies)}")
    else:
        context.append("\nPROJECTS: None listed")

    return "\n".join(context)


def _complete(
    operation: str,
    system_prompt: str,
    user_prompt: str,
    provider: Optional[LLMProvider],
) -> str:
    """Run one completion, wrapping every failure in AssistantError."""
    try:
        llm = provider or get_provider()
        response = llm.generate(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            max_tokens=ADVICE_MAX_TOKENS,
            temperature=ADVICE_TEMPERATURE,
        )
    except Exception as e:
        message = describe_remote_error(e)
        log_assistant_failure(operation, message, e)
        raise AssistantError(message, original_error=e) from e

    content = response.content.strip()
    if not content:
        raise AssistantError("No response received from the AI service.")

    _log_debug(f"{operation}: {response.output_tokens} output tokens from {response.model}")
    return content


def generate_resume_advice(
    message: str, document: ResumeDocument, provider: Optional[LLMProvider] = None
) -> str:
    """
    Answer a career/resume question in the context of the given resume.

    Raises:
        AssistantError: If the AI call fails or returns nothing
    """
    user_prompt = _ADVICE_USER_PROMPT_TEMPLATE.format(
        context=build_resume_context(document), message=message
    )
    return _complete("Resume advice", _ADVICE_SYSTEM_PROMPT, user_prompt, provider)


def improve_section(section: str, content: str, provider: Optional[LLMProvider] = None) -> str:
    """
    Rewrite one section of a resume (e.g., "summary", "experience").

    Raises:
        AssistantError: If the AI call fails or returns nothing
    """
    user_prompt = _IMPROVE_USER_PROMPT_TEMPLATE.format(section=section, content=content)
    return _complete("Section rewrite", _IMPROVE_SYSTEM_PROMPT, user_prompt, provider)
