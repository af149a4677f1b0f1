"""Shared fixtures for resumecraft tests."""

from pathlib import Path

import pytest

from resumecraft.contexts.authoring import Experience, PersonalInfo, ResumeDocument, Skill
from resumecraft.utils import event_logging
from resumecraft.utils.llm import LLMProvider, LLMResponse

REPO_ROOT = Path(__file__).parent.parent
SAMPLE_RESUME = REPO_ROOT / "data" / "ana_ruiz.yaml"
PRESETS_FILE = REPO_ROOT / "configs" / "layout_presets.yaml"
TEMPLATES_DIR = REPO_ROOT / "data" / "templates"


class FakeProvider(LLMProvider):
    """LLM provider that returns canned content (or raises) and records every call."""

    _provider_prefix = "fake"

    def __init__(self, content: str = "", error: Exception = None, model: str = "fake-model"):
        self.content = content
        self.error = error
        self.calls = []
        self.update_model(model)

    def _call_api(self, system_prompt, user_prompt, max_tokens, temperature):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model=self.model, input_tokens=10, output_tokens=20)


@pytest.fixture(autouse=True)
def events_file(tmp_path, monkeypatch):
    """Redirect the event log into the test's temporary directory."""
    path = tmp_path / "events" / "resume_events.log"
    monkeypatch.setattr(event_logging, "EVENTS_FILE", path)
    return path


@pytest.fixture
def sample_document():
    """Two-experience resume with every section filled."""
    return ResumeDocument.from_yaml(SAMPLE_RESUME)


@pytest.fixture
def minimal_document():
    """Name, contact details, one experience, and one skill."""
    return ResumeDocument(
        personal_info=PersonalInfo(
            full_name="Sam Lee", email="sam@example.com", phone="555-0100"
        ),
        experience=[
            Experience(
                company="Acme",
                position="Developer",
                start_date="2020-01",
                end_date="2022-12",
                description=["Wrote Python services."],
            )
        ],
        skills=[Skill(name="Python", category="technical")],
    )


@pytest.fixture
def fake_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def presets_file():
    return PRESETS_FILE


@pytest.fixture
def templates_dir():
    return TEMPLATES_DIR
