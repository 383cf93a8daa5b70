"""Simulated export for the final wizard step.

Nothing is rendered: a counter walks from 0 to 100 on a fixed cadence and
then flips to a completed state exactly once.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from shotmaker.models.schemas import ProjectData
from shotmaker.services.scheduler import ScheduledTask, schedule_every

logger = logging.getLogger(__name__)

RENDERER_LABEL = "Unity Built-in Renderer"


@dataclass
class ExportSummary:
    """Static facts shown once the export completes."""

    title: str
    genre: str
    scene_name: str
    renderer: str
    cover_url: str
    file_name: str
    shot_count: int
    total_duration: float


def build_summary(project: ProjectData, placeholder_url: str) -> ExportSummary:
    first_visual = project.script[0].visual_url if project.script else None
    return ExportSummary(
        title=project.title,
        genre=project.genre,
        scene_name=project.scene.name if project.scene else "",
        renderer=RENDERER_LABEL,
        cover_url=first_visual or placeholder_url,
        file_name=f"{project.genre}_Final_Master.mp4",
        shot_count=len(project.script),
        total_duration=project.total_duration,
    )


class ExportSimulation:
    """Cosmetic render progress from 0 to 100."""

    MAX_PROGRESS = 100

    def __init__(
        self,
        interval: float,
        on_complete: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.interval = interval
        self.progress = 0
        self.completed = False
        self._on_complete = on_complete
        self._on_change = on_change
        self._task: Optional[ScheduledTask] = None

    def start(self) -> None:
        if self._task is None and not self.completed:
            self._task = schedule_every("export-progress", self.interval, self._tick)

    def _tick(self) -> bool:
        if self.completed:
            return False
        if self.progress >= self.MAX_PROGRESS:
            self._finish()
            return False
        self.progress += 1
        if self._on_change:
            self._on_change()
        return True

    def _finish(self) -> None:
        self.completed = True
        logger.info("Export simulation completed")
        if self._on_change:
            self._on_change()
        if self._on_complete:
            self._on_complete()

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done and not self._task.cancelled

    async def wait(self) -> None:
        if self._task is not None:
            await self._task.wait()
