"""Configuration management for Shotmaker."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables (override=True to ensure .env takes precedence)
load_dotenv(override=True)


def _get_float(name: str, default: str) -> float:
    """Read a float from the environment, falling back on bad values."""
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return float(default)


@dataclass
class ScriptConfig:
    """Script generation configuration."""

    # Script backend: "gemini" (structured JSON output) or "claude"
    backend: str = field(
        default_factory=lambda: os.getenv("SCRIPT_BACKEND", "gemini").lower()
    )
    model: str = field(
        default_factory=lambda: os.getenv("SCRIPT_MODEL", "gemini-3-flash-preview")
    )
    # Claude model selection (only used when backend is "claude"):
    # - claude-sonnet-4-5-20250929 (default, balanced)
    # - claude-haiku-4-5-20251001 (fastest, cheapest)
    claude_model: str = field(
        default_factory=lambda: os.getenv("CLAUDE_MODEL", "claude-sonnet-4-5-20250929")
    )
    max_tokens: int = 4096
    num_lines: int = 4
    language: str = field(
        default_factory=lambda: os.getenv("SCRIPT_LANGUAGE", "English")
    )


@dataclass
class ImageConfig:
    """Image generation configuration."""

    # gemini-2.5-flash-image (Nano Banana) is fast and supports 16:9 output
    model: str = field(
        default_factory=lambda: os.getenv("IMAGE_MODEL", "gemini-2.5-flash-image")
    )
    aspect_ratio: str = field(
        default_factory=lambda: os.getenv("IMAGE_ASPECT_RATIO", "16:9")
    )
    style_prefix: str = (
        "Unity Built-in Render Pipeline 3D scene style, game engine look, "
        "simple clean textures, professional lighting, 3D character asset style"
    )
    placeholder_url: str = "https://picsum.photos/1280/720"


@dataclass
class TimingConfig:
    """Cadences (in seconds) for the wizard's animated sequences."""

    log_interval: float = field(
        default_factory=lambda: _get_float("LOG_INTERVAL", "0.6")
    )
    typewriter_interval: float = field(
        default_factory=lambda: _get_float("TYPEWRITER_INTERVAL", "0.4")
    )
    export_interval: float = field(
        default_factory=lambda: _get_float("EXPORT_INTERVAL", "0.04")
    )
    # How often the UI re-renders while an animation is running
    ui_refresh_interval: float = 0.3


@dataclass
class Config:
    """Main application configuration."""

    # API Keys
    google_api_key: str = field(
        default_factory=lambda: os.getenv("GOOGLE_API_KEY", "")
    )
    anthropic_api_key: str = field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", "")
    )

    # Sub-configurations
    script: ScriptConfig = field(default_factory=ScriptConfig)
    image: ImageConfig = field(default_factory=ImageConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)

    @property
    def script_api_key(self) -> str:
        """Credential for the selected script backend."""
        if self.script.backend == "claude":
            return self.anthropic_api_key
        return self.google_api_key

    def validate(self) -> list[str]:
        """Validate configuration and return a list of warnings.

        Missing keys are not fatal: every generation call degrades to
        placeholder content instead.
        """
        warnings = []
        if self.script.backend not in ("gemini", "claude"):
            warnings.append(
                f"SCRIPT_BACKEND '{self.script.backend}' is unknown, using gemini"
            )
        if not self.google_api_key:
            warnings.append("GOOGLE_API_KEY is not set, images will use placeholders")
        if self.script.backend == "claude" and not self.anthropic_api_key:
            warnings.append("ANTHROPIC_API_KEY is not set, scripts will be empty")
        elif self.script.backend != "claude" and not self.google_api_key:
            warnings.append("GOOGLE_API_KEY is not set, scripts will be empty")
        return warnings


# Global config instance
config = Config()
