"""Async boundary for the two remote generation calls.

The SDK calls are blocking, so each request runs in a worker thread while
the session's event loop keeps ticking. Neither operation raises: failures
come back as fallback content.
"""

import asyncio
import logging
from typing import Optional

from shotmaker.agents.script_agent import FAILED_TITLE, ScriptAgent
from shotmaker.config import Config, config as default_config
from shotmaker.models.schemas import GeneratedScript
from shotmaker.services.image_generator import ImageGenerator

logger = logging.getLogger(__name__)


class GenerationClient:
    """Request scripts and shot stills from the hosted models."""

    def __init__(
        self,
        config: Optional[Config] = None,
        script_agent: Optional[ScriptAgent] = None,
        image_generator: Optional[ImageGenerator] = None,
    ):
        self.config = config or default_config
        self.script_agent = script_agent or ScriptAgent(self.config)
        self.image_generator = image_generator or ImageGenerator(self.config)

    @property
    def placeholder_url(self) -> str:
        return self.image_generator.placeholder_url

    async def request_script(self, genre: str, idea: str) -> GeneratedScript:
        """Generate a titled script; returns a line-less fallback on any failure."""
        try:
            return await asyncio.to_thread(self.script_agent.generate_script, genre, idea)
        except Exception as e:
            logger.error(f"Script request failed: {e}")
            return GeneratedScript(title=FAILED_TITLE)

    async def request_image(self, prompt: str) -> str:
        """Generate a still; returns the placeholder reference on any failure."""
        try:
            reference = await asyncio.to_thread(self.image_generator.generate_image, prompt)
        except Exception as e:
            logger.error(f"Image request failed: {e}")
            return self.placeholder_url
        return reference or self.placeholder_url
