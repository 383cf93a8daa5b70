"""Script Agent for turning a genre and an idea into a short shooting script.

Writes a project title plus a handful of script lines (character, dialogue,
camera angle, action) using either Gemini structured output or Claude.
Every failure degrades to a fallback script with an empty line list.
"""

import json
import logging
import re
from typing import Optional

import anthropic

from shotmaker.config import Config, config as default_config
from shotmaker.models.schemas import CameraAngle, GeneratedScript, ScriptLine

logger = logging.getLogger(__name__)

# Fallback titles for the different failure modes
MISSING_KEY_TITLE = "API key not configured"
FAILED_TITLE = "Generation failed"
EMPTY_TITLE = "Untitled Project"
UNPARSEABLE_TITLE = "Unparseable Project"

SCRIPT_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "script": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "character": {"type": "STRING"},
                    "dialogue": {"type": "STRING"},
                    "cameraAngle": {"type": "STRING"},
                    "action": {"type": "STRING"},
                },
                "required": ["id", "character", "dialogue", "cameraAngle", "action"],
            },
        },
    },
    "required": ["title", "script"],
}

JSON_SYSTEM_PROMPT = (
    "You are a screenwriter for short animated films. "
    "Return only valid JSON, no markdown formatting, no explanation text."
)


class ScriptAgent:
    """Agent that writes a titled short script from a genre and an idea."""

    def __init__(self, config: Optional[Config] = None):
        self._config = config
        self._gemini_client = None
        self._claude_client = None

    @property
    def config(self) -> Config:
        """Get config, always reading current global config for model selection."""
        return self._config or default_config

    @property
    def backend(self) -> str:
        return "claude" if self.config.script.backend == "claude" else "gemini"

    def _get_gemini_client(self):
        """Lazy load Gemini client."""
        if self._gemini_client is None:
            from google import genai

            self._gemini_client = genai.Client(api_key=self.config.google_api_key)
        return self._gemini_client

    def _get_claude_client(self) -> anthropic.Anthropic:
        """Lazy load Anthropic client."""
        if self._claude_client is None:
            self._claude_client = anthropic.Anthropic(
                api_key=self.config.anthropic_api_key
            )
        return self._claude_client

    def build_prompt(self, genre: str, idea: str) -> str:
        """Build the script writing prompt."""
        script_cfg = self.config.script
        angles = ", ".join(angle.value for angle in CameraAngle)
        return f"""Based on the genre "{genre}" and the idea "{idea}", write a catchy project title and a {script_cfg.num_lines}-line short script in {script_cfg.language}.

Return a JSON object with "title" (string) and "script" (array).
Each script entry has: id, character, dialogue, cameraAngle ({angles}), action.
Use consistent character names across lines."""

    def generate_script(self, genre: str, idea: str) -> GeneratedScript:
        """Generate a titled script.

        Never raises: a missing key, a failed request or an unparseable
        answer all produce a fallback script with no lines.

        Args:
            genre: Genre label chosen by the user
            idea: Free-text creative idea

        Returns:
            The generated script, or a fallback with an empty line list
        """
        if not self.config.script_api_key:
            logger.error(f"Script generation skipped: no API key for backend '{self.backend}'")
            return GeneratedScript(title=MISSING_KEY_TITLE)

        prompt = self.build_prompt(genre, idea)

        logger.info("=" * 60)
        logger.info(f"SCRIPT PROMPT (backend={self.backend}):")
        logger.info("-" * 60)
        logger.info(f"Genre: {genre}")
        logger.info(f"Idea: {idea[:200]}..." if len(idea) > 200 else f"Idea: {idea}")
        logger.info("=" * 60)

        try:
            if self.backend == "claude":
                response_text = self._request_claude(prompt)
            else:
                response_text = self._request_gemini(prompt)
        except Exception as e:
            logger.error(f"Script generation failed: {e}")
            return GeneratedScript(title=FAILED_TITLE)

        if not response_text or not response_text.strip():
            logger.warning("Script generation returned an empty response")
            return GeneratedScript(title=EMPTY_TITLE)

        script = self.parse_response(response_text)
        if script is None:
            logger.error("Failed to parse script response")
            return GeneratedScript(title=UNPARSEABLE_TITLE)

        logger.info(f"Generated script '{script.title}' with {len(script.lines)} lines")
        return script

    def _request_gemini(self, prompt: str) -> Optional[str]:
        from google.genai import types

        client = self._get_gemini_client()
        response = client.models.generate_content(
            model=self.config.script.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=SCRIPT_RESPONSE_SCHEMA,
            ),
        )
        return response.text

    def _request_claude(self, prompt: str) -> Optional[str]:
        client = self._get_claude_client()
        response = client.messages.create(
            model=self.config.script.claude_model,
            max_tokens=self.config.script.max_tokens,
            system=JSON_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        logger.info(f"Response from model: {response.model}")
        if not response.content:
            return None
        return response.content[0].text

    def parse_response(self, response_text: str) -> Optional[GeneratedScript]:
        """Parse a model answer into a GeneratedScript.

        Accepts bare JSON, JSON inside a markdown code block, or a JSON
        object embedded in surrounding text.
        """
        response_text = response_text.strip()

        candidates = [response_text]
        fenced = re.search(r'```(?:json)?\s*([\s\S]*?)\s*```', response_text)
        if fenced:
            candidates.append(fenced.group(1))
        braces = re.search(r'\{[\s\S]*\}', response_text)
        if braces:
            candidates.append(braces.group(0))

        for candidate in candidates:
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            script = parse_script_data(data)
            if script is not None:
                return script

        return None


def parse_script_data(data: dict) -> Optional[GeneratedScript]:
    """Convert decoded JSON into a GeneratedScript, or None if malformed."""
    if not isinstance(data, dict):
        return None

    raw_lines = data.get("script", data.get("lines"))
    if not isinstance(raw_lines, list):
        return None

    lines = []
    seen_ids = set()
    for position, raw in enumerate(raw_lines, start=1):
        if not isinstance(raw, dict):
            continue

        # Shot ids must be unique within the project
        line_id = str(raw.get("id") or "").strip()
        if not line_id or line_id in seen_ids:
            line_id = f"shot-{position}"
            while line_id in seen_ids:
                line_id = f"{line_id}-dup"
        seen_ids.add(line_id)

        lines.append(ScriptLine(
            id=line_id,
            character=str(raw.get("character") or "Unknown").strip(),
            dialogue=str(raw.get("dialogue") or ""),
            camera_angle=CameraAngle.parse(
                str(raw.get("cameraAngle") or raw.get("camera_angle") or "")
            ),
            action=str(raw.get("action") or ""),
        ))

    title = str(data.get("title") or "").strip() or EMPTY_TITLE
    return GeneratedScript(title=title, lines=lines)
