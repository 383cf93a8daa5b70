"""Per-shot editing for the Shooting step.

Each shot is edited independently. Which edits trigger a new still depends on
the kind of event:

- camera angle change: regenerate immediately
- action text: regenerate only when the field loses focus (`commit_action`)
- dialogue text and duration: never regenerate
- a shot becoming active without an image: regenerate once

Image requests run as tasks on the session loop. Only the most recently
issued request for a shot may write that shot's image, so a slow older
response can never overwrite a newer one.
"""

import asyncio
import logging
from typing import Callable, Optional

from shotmaker.models.schemas import CameraAngle, ProjectData, ScriptLine
from shotmaker.services.generation_client import GenerationClient

logger = logging.getLogger(__name__)

SHOT_PROMPT_TEMPLATE = (
    "Unity Built-in Renderer scene, {scene}, character {character} performing "
    "{action}, {angle} camera angle, cinematic lighting"
)


def build_shot_prompt(project: ProjectData, line: ScriptLine) -> str:
    """Describe a shot for the image model."""
    return SHOT_PROMPT_TEMPLATE.format(
        scene=project.scene.name if project.scene else "",
        character=line.character,
        action=line.action,
        angle=line.camera_angle.value,
    )


class ShotEditor:
    """Editing session over the project's script lines."""

    def __init__(
        self,
        get_project: Callable[[], ProjectData],
        update_project: Callable[..., None],
        client: GenerationClient,
        on_back: Optional[Callable[[], None]] = None,
        on_export: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._get_project = get_project
        self._update_project = update_project
        self.client = client
        self._on_back = on_back
        self._on_export = on_export
        self._on_change = on_change

        self.current_index = 0
        self._request_seq: dict[str, int] = {}
        self._generating: dict[str, bool] = {}
        self._auto_requested: set[str] = set()
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    # -- reading -------------------------------------------------------

    @property
    def project(self) -> ProjectData:
        return self._get_project()

    @property
    def lines(self) -> list[ScriptLine]:
        return self.project.script

    @property
    def current_line(self) -> Optional[ScriptLine]:
        lines = self.lines
        if not lines:
            return None
        if 0 <= self.current_index < len(lines):
            return lines[self.current_index]
        return lines[0]

    def is_generating(self, shot_id: str) -> bool:
        return self._generating.get(shot_id, False)

    @property
    def total_duration(self) -> float:
        return sum(line.effective_duration for line in self.lines)

    @property
    def current_progress(self) -> float:
        """Sum of the durations of every shot before the active one."""
        return sum(line.effective_duration for line in self.lines[: self.current_index])

    @property
    def pending_requests(self) -> int:
        return len(self._tasks)

    # -- lifecycle -----------------------------------------------------

    def start(self) -> None:
        """Open the editor on the first shot."""
        self.current_index = 0
        self._ensure_visual(self.current_index)

    def close(self) -> None:
        """Cancel in-flight image requests of this editor."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._generating.clear()

    async def wait_idle(self) -> None:
        """Wait for every in-flight image request to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def back(self) -> None:
        if self._on_back:
            self._on_back()

    def export(self) -> None:
        if self._on_export:
            self._on_export()

    # -- editing -------------------------------------------------------

    def select(self, index: int) -> None:
        """Make a shot active, generating its still on first display."""
        if not self.lines:
            return
        self.current_index = max(0, min(index, len(self.lines) - 1))
        self._notify()
        self._ensure_visual(self.current_index)

    def rename_project(self, title: str) -> None:
        self._update_project(title=title)
        self._notify()

    def edit_dialogue(self, text: str) -> None:
        self._replace_line(self.current_index, dialogue=text)

    def edit_action(self, text: str) -> None:
        """Keystroke-level edit; the still is refreshed on commit only."""
        self._replace_line(self.current_index, action=text)

    def commit_action(self) -> Optional[asyncio.Task]:
        """The action field lost focus: refresh the still."""
        return self.refresh_visual(self.current_index)

    def change_camera_angle(self, angle) -> Optional[asyncio.Task]:
        if not isinstance(angle, CameraAngle):
            angle = CameraAngle.parse(str(angle))
        if not self._replace_line(self.current_index, camera_angle=angle):
            return None
        return self.refresh_visual(self.current_index)

    def set_duration(self, seconds: float) -> None:
        self._replace_line(self.current_index, duration=seconds)

    # -- image generation ----------------------------------------------

    def refresh_visual(self, index: int) -> Optional[asyncio.Task]:
        """Issue a new image request for the shot at `index`."""
        if self._closed or not (0 <= index < len(self.lines)):
            return None

        line = self.lines[index]
        seq = self._request_seq.get(line.id, 0) + 1
        self._request_seq[line.id] = seq
        self._generating[line.id] = True
        prompt = build_shot_prompt(self.project, line)

        task = asyncio.get_running_loop().create_task(
            self._generate(line.id, seq, prompt), name=f"shot-image-{line.id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._notify()
        return task

    async def _generate(self, shot_id: str, seq: int, prompt: str) -> None:
        reference = await self.client.request_image(prompt)

        if self._closed:
            return
        if self._request_seq.get(shot_id) != seq:
            logger.debug(f"Dropping superseded image for shot {shot_id} (request {seq})")
            return

        # Look the shot up again: lines may have been replaced meanwhile
        lines = list(self.lines)
        for idx, line in enumerate(lines):
            if line.id == shot_id:
                lines[idx] = line.model_copy(update={"visual_url": reference})
                self._update_project(script=lines)
                break
        else:
            logger.debug(f"Shot {shot_id} no longer exists, image discarded")

        self._generating[shot_id] = False
        self._notify()

    def _ensure_visual(self, index: int) -> None:
        if not (0 <= index < len(self.lines)):
            return
        line = self.lines[index]
        if line.visual_url:
            return
        if line.id in self._auto_requested or self.is_generating(line.id):
            return
        self._auto_requested.add(line.id)
        self.refresh_visual(index)

    # -- helpers -------------------------------------------------------

    def _replace_line(self, index: int, **changes) -> bool:
        lines = list(self.lines)
        if not (0 <= index < len(lines)):
            return False
        lines[index] = lines[index].model_copy(update=changes)
        self._update_project(script=lines)
        self._notify()
        return True

    def _notify(self) -> None:
        if self._on_change:
            self._on_change()
