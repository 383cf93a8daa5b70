"""Tests for the script agent's fail-soft generation and parsing."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from shotmaker.agents.script_agent import (
    EMPTY_TITLE,
    FAILED_TITLE,
    MISSING_KEY_TITLE,
    UNPARSEABLE_TITLE,
    ScriptAgent,
    parse_script_data,
)
from shotmaker.config import Config, ScriptConfig
from shotmaker.models.schemas import CameraAngle

SCRIPT_JSON = json.dumps({
    "title": "Ramen in Orbit",
    "script": [
        {"id": "1", "character": "Kaelen", "dialogue": "Tea?", "cameraAngle": "Wide", "action": "pours tea"},
        {"id": "2", "character": "Aria", "dialogue": "Always.", "cameraAngle": "Close-up", "action": "smiles"},
    ],
})


def gemini_agent(response_text=None, error=None) -> ScriptAgent:
    agent = ScriptAgent(Config(google_api_key="test-key"))
    client = MagicMock()
    if error is not None:
        client.models.generate_content.side_effect = error
    else:
        client.models.generate_content.return_value = SimpleNamespace(text=response_text)
    agent._gemini_client = client
    return agent


def claude_agent(response_text: str) -> ScriptAgent:
    agent = ScriptAgent(Config(anthropic_api_key="test-key", script=ScriptConfig(backend="claude")))
    client = MagicMock()
    client.messages.create.return_value = SimpleNamespace(
        model="claude-test",
        content=[SimpleNamespace(text=response_text)],
    )
    agent._claude_client = client
    return agent


class TestGenerateScript:
    def test_missing_key_returns_fallback(self):
        agent = ScriptAgent(Config(google_api_key=""))
        result = agent.generate_script("Sci-Fi", "idea")
        assert result.title == MISSING_KEY_TITLE
        assert result.lines == []

    def test_transport_error_returns_fallback(self):
        agent = gemini_agent(error=RuntimeError("connection reset"))
        result = agent.generate_script("Sci-Fi", "idea")
        assert result.title == FAILED_TITLE
        assert result.lines == []

    def test_empty_response(self):
        result = gemini_agent(response_text="").generate_script("Sci-Fi", "idea")
        assert result.title == EMPTY_TITLE
        assert result.lines == []

    def test_unparseable_response(self):
        result = gemini_agent(response_text="not json at all").generate_script("Sci-Fi", "idea")
        assert result.title == UNPARSEABLE_TITLE
        assert result.lines == []

    def test_gemini_success(self):
        agent = gemini_agent(response_text=SCRIPT_JSON)
        result = agent.generate_script("Sci-Fi", "zero-g ramen")

        assert result.title == "Ramen in Orbit"
        assert [line.character for line in result.lines] == ["Kaelen", "Aria"]
        assert result.lines[1].camera_angle == CameraAngle.CLOSE_UP

        kwargs = agent._gemini_client.models.generate_content.call_args.kwargs
        assert "zero-g ramen" in kwargs["contents"]
        assert kwargs["config"].response_mime_type == "application/json"

    def test_claude_backend_reads_fenced_json(self):
        agent = claude_agent(f"Here you go:\n```json\n{SCRIPT_JSON}\n```")
        result = agent.generate_script("Mystery", "toaster witness")

        assert agent.backend == "claude"
        assert result.title == "Ramen in Orbit"
        assert len(result.lines) == 2

    def test_prompt_mentions_inputs(self):
        agent = ScriptAgent(Config())
        prompt = agent.build_prompt("Modern", "a quiet heist")
        assert "Modern" in prompt
        assert "a quiet heist" in prompt
        assert "Over-the-shoulder" in prompt


class TestParseResponse:
    def test_json_embedded_in_text(self):
        agent = ScriptAgent(Config())
        result = agent.parse_response(f"Sure! {SCRIPT_JSON} Enjoy.")
        assert result is not None
        assert result.title == "Ramen in Orbit"

    def test_non_object_is_rejected(self):
        assert parse_script_data(["not", "a", "dict"]) is None
        assert parse_script_data({"title": "x", "script": "nope"}) is None

    def test_duplicate_and_missing_ids_are_rekeyed(self):
        result = parse_script_data({
            "title": "T",
            "script": [
                {"id": "1", "character": "A", "dialogue": "", "cameraAngle": "Wide", "action": ""},
                {"id": "1", "character": "B", "dialogue": "", "cameraAngle": "Wide", "action": ""},
                {"character": "C", "dialogue": "", "cameraAngle": "Wide", "action": ""},
            ],
        })
        ids = [line.id for line in result.lines]
        assert len(set(ids)) == 3
        assert ids[0] == "1"

    def test_unknown_angle_and_blank_title(self):
        result = parse_script_data({
            "title": "  ",
            "script": [{"id": "1", "character": "A", "dialogue": "", "cameraAngle": "Dutch", "action": ""}],
        })
        assert result.title == EMPTY_TITLE
        assert result.lines[0].camera_angle == CameraAngle.MEDIUM

    def test_durations_default(self):
        result = parse_script_data(json.loads(SCRIPT_JSON))
        assert all(line.duration == pytest.approx(3.0) for line in result.lines)
