"""Data models for Shotmaker."""

import math
from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_SHOT_DURATION = 3.0


class WizardStep(IntEnum):
    """Linear steps of the filmmaking wizard."""

    CREATIVE = 0
    SCRIPT = 1
    CASTING = 2
    SCENERY = 3
    SHOOTING = 4
    EXPORT = 5

    @classmethod
    def clamp(cls, value: int) -> "WizardStep":
        """Clamp any integer onto the closed step range."""
        return cls(max(cls.CREATIVE, min(int(value), cls.EXPORT)))


class CameraAngle(str, Enum):
    """Camera angles a shot can be framed with."""

    WIDE = "Wide"
    MEDIUM = "Medium"
    CLOSE_UP = "Close-up"
    OVER_THE_SHOULDER = "Over-the-shoulder"

    @classmethod
    def parse(cls, value: str) -> "CameraAngle":
        """Parse a model-supplied angle, falling back to MEDIUM."""
        normalized = (value or "").strip().lower().replace("_", "-")
        for angle in cls:
            if angle.value.lower() == normalized:
                return angle
        # Models sometimes answer "close up" or "over the shoulder"
        normalized = normalized.replace(" ", "-")
        for angle in cls:
            if angle.value.lower() == normalized:
                return angle
        return cls.MEDIUM


class Actor(BaseModel):
    """A pre-baked actor avatar from the casting pool."""

    id: str
    name: str
    description: str
    avatar_url: str
    age: str = ""
    gender: str = ""
    voice: str = ""
    tone: str = ""

    model_config = {"frozen": True}


class SetScene(BaseModel):
    """A pre-baked backdrop the shoot takes place in."""

    id: str
    name: str
    description: str
    image_url: str

    model_config = {"frozen": True}


class ScriptLine(BaseModel):
    """One shot of the script: a character's line plus framing metadata."""

    id: str
    character: str
    dialogue: str
    camera_angle: CameraAngle = CameraAngle.MEDIUM
    action: str = ""
    visual_url: Optional[str] = None
    duration: Optional[float] = DEFAULT_SHOT_DURATION

    @property
    def effective_duration(self) -> float:
        """Duration used by the timeline; unset durations count as the default."""
        if not self.duration or math.isnan(self.duration):
            return DEFAULT_SHOT_DURATION
        return self.duration


class GeneratedScript(BaseModel):
    """Result of a script generation request."""

    title: str
    lines: list[ScriptLine] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.lines


class ProjectData(BaseModel):
    """The single mutable record threaded through every wizard step."""

    title: str = "Untitled Shoot"
    genre: str = "Sci-Fi"
    idea: str = ""
    script: list[ScriptLine] = Field(default_factory=list)
    cast: dict[str, Actor] = Field(default_factory=dict)
    scene: Optional[SetScene] = None

    @property
    def can_generate(self) -> bool:
        """Generation may only start with a non-blank idea."""
        return bool(self.idea.strip())

    @property
    def total_duration(self) -> float:
        return sum(line.effective_duration for line in self.script)
