"""Image generation service using Google Gemini.

Renders one still per shot. The result is always a displayable image
reference: an embedded PNG data URI on success, or the fixed placeholder URL
when the key is missing, the request fails, or no image comes back.
"""

import base64
import logging
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from shotmaker.config import Config, config as default_config

logger = logging.getLogger(__name__)


def to_data_uri(image_bytes: bytes) -> str:
    """Re-encode raw image bytes as an embedded PNG reference."""
    image = Image.open(BytesIO(image_bytes))
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


class ImageGenerator:
    """Generate shot stills using the Gemini image model."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config
        self._client = None

    @property
    def placeholder_url(self) -> str:
        return self.config.image.placeholder_url

    def _get_client(self):
        """Lazy load Gemini client."""
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.config.google_api_key)
        return self._client

    def build_prompt(self, prompt: str) -> str:
        """Prefix the shot description with the fixed engine-look style."""
        return f"{self.config.image.style_prefix}: {prompt}"

    def generate_image(self, prompt: str) -> str:
        """
        Generate a still for a shot.

        Args:
            prompt: The shot description

        Returns:
            A data URI with the generated image, or the placeholder URL
        """
        if not self.config.google_api_key:
            return self.placeholder_url

        from google.genai import types

        full_prompt = self.build_prompt(prompt)
        model_name = self.config.image.model

        logger.info("=" * 60)
        logger.info(f"GEMINI IMAGE PROMPT (model={model_name}):")
        logger.info("-" * 60)
        logger.info(full_prompt)
        logger.info(f"Ratio: {self.config.image.aspect_ratio}")
        logger.info("=" * 60)

        try:
            client = self._get_client()
            response = client.models.generate_content(
                model=model_name,
                contents=[full_prompt],
                config=types.GenerateContentConfig(
                    response_modalities=["TEXT", "IMAGE"],
                    image_config=types.ImageConfig(
                        aspect_ratio=self.config.image.aspect_ratio,
                    ),
                ),
            )

            image_bytes = self._extract_image_bytes(response)
            if image_bytes is None:
                logger.warning("Image response contained no image payload")
                return self.placeholder_url

            reference = to_data_uri(image_bytes)
            logger.info(f"Generated image ({len(image_bytes)} bytes)")
            return reference

        except UnidentifiedImageError as e:
            logger.error(f"Image payload could not be decoded: {e}")
        except Exception as e:
            logger.error(f"Image generation failed: {e}")

        return self.placeholder_url

    @staticmethod
    def _extract_image_bytes(response) -> Optional[bytes]:
        """Return the first inline image payload of a response, if any."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return None

        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            if getattr(part, "text", None) is not None:
                # Model may return text description along with image
                logger.debug(f"Model text response: {part.text[:100]}...")
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                return inline_data.data

        return None
