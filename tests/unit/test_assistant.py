"""Unit tests for AI-assisted resume editing."""

import pytest

from resumecraft.contexts.authoring import AssistantError, ResumeDocument
from resumecraft.contexts.authoring.assistant import (
    build_resume_context,
    generate_resume_advice,
    improve_section,
)
from resumecraft.utils.remote_errors import RATE_LIMITED


@pytest.mark.unit
def test_context_for_empty_resume():
    context = build_resume_context(ResumeDocument())
    assert "WORK EXPERIENCE: None listed" in context
    assert "SKILLS: None listed" in context
    assert "EDUCATION: None listed" in context
    assert "PROJECTS: None listed" in context


@pytest.mark.unit
def test_context_summarizes_resume(sample_document):
    context = build_resume_context(sample_document)

    assert "Name: Ana María Ruiz" in context
    assert "WORK EXPERIENCE (2 positions):" in context
    assert "1. Senior Backend Engineer at Lumen Logistics (2021-03 - Present)" in context
    assert "Technical: Python (expert), PostgreSQL (advanced), Docker (advanced)" in context
    assert "B.Sc. in Computer Science from Universidad Politécnica de Madrid (2018-05)" in context


@pytest.mark.unit
def test_advice_uses_resume_and_question(sample_document, fake_provider):
    provider = fake_provider(content="  Lead with your latency numbers.  \n")

    answer = generate_resume_advice("How do I open my summary?", sample_document, provider=provider)

    assert answer == "Lead with your latency numbers."
    prompt = provider.calls[0]["user_prompt"]
    assert "How do I open my summary?" in prompt
    assert "Lumen Logistics" in prompt


@pytest.mark.unit
def test_improve_section(fake_provider):
    provider = fake_provider(content="Backend engineer specializing in high-throughput APIs.")

    improved = improve_section("summary", "Backend dev who likes APIs.", provider=provider)

    assert improved == "Backend engineer specializing in high-throughput APIs."
    assert "improve this summary section" in provider.calls[0]["user_prompt"]
    assert "Backend dev who likes APIs." in provider.calls[0]["user_prompt"]


@pytest.mark.unit
def test_empty_response_raises(fake_provider):
    with pytest.raises(AssistantError, match="No response received"):
        improve_section("summary", "text", provider=fake_provider(content="   "))


@pytest.mark.unit
def test_provider_failure_raises_classified_error(sample_document, fake_provider):
    provider = fake_provider(error=RuntimeError("429 Too Many Requests"))

    with pytest.raises(AssistantError) as exc_info:
        generate_resume_advice("Any tips?", sample_document, provider=provider)

    assert exc_info.value.message == RATE_LIMITED
