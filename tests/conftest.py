"""
Pytest Configuration and Fixtures

Shared fixtures for all tests.
"""

import asyncio
import random

import pytest

from shotmaker.config import Config, TimingConfig
from shotmaker.models.schemas import CameraAngle, GeneratedScript, ProjectData, ScriptLine

PLACEHOLDER = "https://picsum.photos/1280/720"


class FakeGenerationClient:
    """In-memory stand-in for GenerationClient that records every request."""

    placeholder_url = PLACEHOLDER

    def __init__(self, script=None, image_delay: float = 0.0):
        self.script = script or GeneratedScript(title="Test Title", lines=[])
        self.image_delay = image_delay
        self.script_requests: list[tuple[str, str]] = []
        self.image_requests: list[str] = []

    async def request_script(self, genre: str, idea: str) -> GeneratedScript:
        self.script_requests.append((genre, idea))
        await asyncio.sleep(0)
        return self.script

    async def request_image(self, prompt: str) -> str:
        self.image_requests.append(prompt)
        await asyncio.sleep(self.image_delay)
        return f"data:image/png;base64,{len(self.image_requests)}"


def make_line(line_id: str, character: str, duration: float = 3.0, **kwargs) -> ScriptLine:
    return ScriptLine(
        id=line_id,
        character=character,
        dialogue=kwargs.pop("dialogue", f"{character} speaks"),
        camera_angle=kwargs.pop("camera_angle", CameraAngle.MEDIUM),
        action=kwargs.pop("action", "looks around"),
        duration=duration,
        **kwargs,
    )


@pytest.fixture
def fast_config() -> Config:
    """Config with millisecond cadences and no API keys."""
    return Config(
        google_api_key="",
        anthropic_api_key="",
        timing=TimingConfig(
            log_interval=0.001,
            typewriter_interval=0.001,
            export_interval=0.0005,
        ),
    )


@pytest.fixture
def sample_lines() -> list[ScriptLine]:
    """Four lines with characters A, B, A, C."""
    return [
        make_line("1", "A"),
        make_line("2", "B"),
        make_line("3", "A"),
        make_line("4", "C"),
    ]


@pytest.fixture
def sample_script(sample_lines) -> GeneratedScript:
    return GeneratedScript(title="The Toaster Witness", lines=sample_lines)


@pytest.fixture
def fake_client(sample_script) -> FakeGenerationClient:
    return FakeGenerationClient(script=sample_script)


@pytest.fixture
def project() -> ProjectData:
    return ProjectData(genre="Sci-Fi", idea="A robot learns to love")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)


@pytest.fixture
def client_factory():
    """Build FakeGenerationClient instances with custom scripts or delays."""
    return FakeGenerationClient


@pytest.fixture
def line_factory():
    return make_line
