"""Unit tests for remote ATS judgment requests and response parsing."""

import json

import pytest

from resumecraft.contexts.authoring import ResumeDocument
from resumecraft.contexts.scoring import RemoteJudgmentError, parse_judgment_response, request_judgment
from resumecraft.contexts.scoring.judgment import (
    MAX_KEYWORDS,
    MAX_SUGGESTIONS,
    NO_RESPONSE_MESSAGE,
    PARSE_FAILURE_MESSAGE,
    JudgmentParsed,
    JudgmentRejected,
    build_judgment_prompt,
    serialize_for_judgment,
)
from resumecraft.utils.remote_errors import INVALID_CREDENTIALS, RATE_LIMITED

VALID_RESPONSE = {
    "score": 78,
    "analysis": "Clear structure, few keywords.",
    "suggestions": ["Add a skills summary", "Quantify the ETL work"],
    "keywords": ["Python", "Kafka"],
}


# =============================================================================
# parse_judgment_response
# =============================================================================


@pytest.mark.unit
def test_parse_valid_response():
    result = parse_judgment_response(json.dumps(VALID_RESPONSE))

    assert isinstance(result, JudgmentParsed)
    assert result.judgment.score == 78.0
    assert result.judgment.keywords == ["Python", "Kafka"]
    assert result.judgment.suggestions == ["Add a skills summary", "Quantify the ETL work"]
    assert result.judgment.analysis == "Clear structure, few keywords."


@pytest.mark.unit
def test_parse_tolerates_code_fences():
    text = "```json\n" + json.dumps(VALID_RESPONSE) + "\n```"
    assert isinstance(parse_judgment_response(text), JudgmentParsed)


@pytest.mark.unit
def test_parse_analysis_is_optional():
    payload = {key: value for key, value in VALID_RESPONSE.items() if key != "analysis"}
    result = parse_judgment_response(json.dumps(payload))
    assert result.judgment.analysis == ""


@pytest.mark.unit
@pytest.mark.parametrize("raw, expected", [(140, 100.0), (-3, 0.0), (66.5, 66.5)])
def test_parse_clamps_score(raw, expected):
    result = parse_judgment_response(json.dumps({**VALID_RESPONSE, "score": raw}))
    assert result.judgment.score == expected


@pytest.mark.unit
def test_parse_caps_list_lengths():
    payload = {
        **VALID_RESPONSE,
        "keywords": [f"kw{i}" for i in range(30)],
        "suggestions": [f"tip {i}" for i in range(12)],
    }
    judgment = parse_judgment_response(json.dumps(payload)).judgment

    assert len(judgment.keywords) == MAX_KEYWORDS
    assert len(judgment.suggestions) == MAX_SUGGESTIONS
    assert judgment.keywords[0] == "kw0"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "I think this resume is about a 75.",
        "[78, [], []]",
        json.dumps({**VALID_RESPONSE, "score": "78"}),
        json.dumps({**VALID_RESPONSE, "score": True}),
        json.dumps({**VALID_RESPONSE, "score": None}),
        '{"score": NaN, "keywords": [], "suggestions": []}',
        '{"score": 1' + "0" * 400 + ', "keywords": [], "suggestions": []}',
        '{"score": 1e400, "keywords": [], "suggestions": []}',
        json.dumps({"score": 70, "suggestions": []}),
        json.dumps({**VALID_RESPONSE, "keywords": "Python, Kafka"}),
        json.dumps({**VALID_RESPONSE, "suggestions": [1, 2]}),
        json.dumps({**VALID_RESPONSE, "analysis": ["not", "a", "string"]}),
    ],
)
def test_parse_rejects_malformed_responses(text):
    """Anything off-schema is rejected rather than filled with defaults."""
    result = parse_judgment_response(text)
    assert isinstance(result, JudgmentRejected)
    assert result.reason


# =============================================================================
# Prompt construction
# =============================================================================


@pytest.mark.unit
def test_serialize_for_judgment(sample_document):
    text = serialize_for_judgment(sample_document)

    assert "Name: Ana María Ruiz" in text
    assert "1. Senior Backend Engineer at Lumen Logistics" in text
    assert "Duration: 2021-03 - Present" in text
    assert "Technical: Python (expert), PostgreSQL (advanced), Docker (advanced)" in text
    # Blank website is omitted
    assert "Website:" not in text


@pytest.mark.unit
def test_serialize_marks_missing_contact_details():
    text = serialize_for_judgment(ResumeDocument())
    assert "Email: Not provided" in text
    assert "WORK EXPERIENCE" not in text


@pytest.mark.unit
def test_job_description_section_only_when_given():
    assert "TARGET JOB DESCRIPTION" not in build_judgment_prompt("resume", None)
    assert "TARGET JOB DESCRIPTION" not in build_judgment_prompt("resume", "   ")

    prompt = build_judgment_prompt("resume", "Backend engineer, Kafka required")
    assert "TARGET JOB DESCRIPTION:\nBackend engineer, Kafka required" in prompt


# =============================================================================
# request_judgment
# =============================================================================


@pytest.mark.unit
def test_request_judgment_success(sample_document, fake_provider):
    provider = fake_provider(content=json.dumps(VALID_RESPONSE))
    judgment = request_judgment(sample_document, "Kafka engineer", provider=provider)

    assert judgment.score == 78.0
    assert len(provider.calls) == 1
    assert "Kafka engineer" in provider.calls[0]["user_prompt"]
    assert "Lumen Logistics" in provider.calls[0]["user_prompt"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "error, message",
    [
        (RuntimeError("Error code: 429 - rate_limit_exceeded"), RATE_LIMITED),
        (RuntimeError("Error code: 401 - invalid api key"), INVALID_CREDENTIALS),
    ],
)
def test_request_judgment_classifies_provider_errors(sample_document, fake_provider, error, message):
    """Provider failures surface once, with a stable message; no retry."""
    provider = fake_provider(error=error)

    with pytest.raises(RemoteJudgmentError) as exc_info:
        request_judgment(sample_document, provider=provider)

    assert exc_info.value.message == message
    assert exc_info.value.original_error is error
    assert len(provider.calls) == 1


@pytest.mark.unit
def test_request_judgment_empty_response(sample_document, fake_provider):
    with pytest.raises(RemoteJudgmentError) as exc_info:
        request_judgment(sample_document, provider=fake_provider(content="   "))
    assert exc_info.value.message == NO_RESPONSE_MESSAGE


@pytest.mark.unit
def test_request_judgment_invalid_response(sample_document, fake_provider):
    provider = fake_provider(content='{"score": "high"}')

    with pytest.raises(RemoteJudgmentError) as exc_info:
        request_judgment(sample_document, provider=provider)
    assert exc_info.value.message.startswith(PARSE_FAILURE_MESSAGE)


@pytest.mark.unit
def test_request_judgment_score_too_large_for_float(sample_document, fake_provider):
    """An integer score beyond float range is a parse failure, not an OverflowError."""
    provider = fake_provider(content='{"score": 1' + "0" * 400 + ', "keywords": [], "suggestions": []}')

    with pytest.raises(RemoteJudgmentError) as exc_info:
        request_judgment(sample_document, provider=provider)
    assert exc_info.value.message.startswith(PARSE_FAILURE_MESSAGE)
