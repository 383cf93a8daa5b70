"""Wizard controller: step sequencing and step-scoped side effects.

The controller owns the current step and the project record. Moving between
steps runs the exit hook of the old step and the entry hook of the new one:

- entering Script plays the agent log and then the typewriter reveal, unless
  the idea is the one already animated, in which case the full script shows
  at once
- entering Shooting opens a ShotEditor over the project
- entering Export starts an ExportSimulation
- leaving any of those steps cancels its timers and requests

All methods must be called from the session's event loop thread.
"""

import logging
import random
from typing import Callable, Optional, Sequence, Union

from shotmaker.config import Config, config as default_config
from shotmaker.models.catalog import (
    ACTORS_POOL,
    GENRES,
    SCENES,
    get_actor,
    get_scene,
    random_inspiration,
)
from shotmaker.models.schemas import (
    DEFAULT_SHOT_DURATION,
    Actor,
    ProjectData,
    ScriptLine,
    SetScene,
    WizardStep,
)
from shotmaker.services.casting import (
    assign_actor,
    on_script_generated,
    select_scene,
    unique_characters,
)
from shotmaker.services.export_simulator import ExportSimulation, ExportSummary, build_summary
from shotmaker.services.generation_client import GenerationClient
from shotmaker.services.scheduler import TaskGroup
from shotmaker.services.shot_editor import ShotEditor

logger = logging.getLogger(__name__)

AGENT_LOGS = [
    "[AI Writer]: Building the narrative frame from your idea...",
    "[AI Director]: Calculating character tension and camera marks...",
    "[AI Producer]: Matched the optimal Unity asset pipeline...",
    "[AI System]: Script complete, starting synchronized preview.",
]

SKIP_LOG = "[AI System]: Script already synced, skipping the collaboration replay."

# Typewriter state before the agent log has finished
TYPEWRITER_NOT_STARTED = -1


def new_project(rng: Optional[random.Random] = None) -> ProjectData:
    """A fresh project seeded with a random starter idea."""
    return ProjectData(genre=GENRES[0], idea=random_inspiration(rng))


class WizardController:
    """Six-step filmmaking wizard over a single project record."""

    def __init__(
        self,
        client: Optional[GenerationClient] = None,
        config: Optional[Config] = None,
        project: Optional[ProjectData] = None,
        actors: Sequence[Actor] = ACTORS_POOL,
        scenes: Sequence[SetScene] = SCENES,
        on_change: Optional[Callable[[], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or default_config
        self.client = client or GenerationClient(self.config)
        self.actors = list(actors)
        self.scenes = list(scenes)
        self._on_change = on_change
        self._rng = rng

        self.step = WizardStep.CREATIVE
        self.project = project or new_project(rng)
        self.loading = False

        # Script step
        self.agent_logs: list[str] = []
        self.typewriter_index = TYPEWRITER_NOT_STARTED
        self.last_animated_idea: Optional[str] = None

        # Casting / Scenery
        self.active_cast_character: Optional[str] = None
        self.previewed_scene: Optional[SetScene] = None

        # Shooting / Export sub-applications
        self.shot_editor: Optional[ShotEditor] = None
        self.export: Optional[ExportSimulation] = None

        self._timers = TaskGroup()

    # -- derived state -------------------------------------------------

    @property
    def characters(self) -> list[str]:
        return unique_characters(self.project.script)

    @property
    def visible_lines(self) -> list[ScriptLine]:
        """Script lines revealed so far by the typewriter."""
        return self.project.script[: self.typewriter_index + 1]

    @property
    def script_revealed(self) -> bool:
        return self.typewriter_index == len(self.project.script)

    @property
    def can_generate(self) -> bool:
        return self.project.can_generate and not self.loading

    @property
    def can_advance(self) -> bool:
        if self.step == WizardStep.CASTING and self.active_cast_character is not None:
            return False
        return True

    @property
    def is_animating(self) -> bool:
        """True while anything is still ticking or waiting on the network."""
        if self._timers.active:
            return True
        if self.export is not None and self.export.running:
            return True
        if self.shot_editor is not None and self.shot_editor.pending_requests:
            return True
        return False

    @property
    def export_summary(self) -> ExportSummary:
        return build_summary(self.project, self.client.placeholder_url)

    # -- project edits -------------------------------------------------

    def update_project(self, **changes) -> None:
        """Replace whole fields of the project record."""
        self.project = self.project.model_copy(update=changes)
        self._notify()

    def set_genre(self, genre: str) -> None:
        self.update_project(genre=genre)

    def set_idea(self, idea: str) -> None:
        if idea == self.project.idea:
            return
        self.update_project(idea=idea)
        if self.step == WizardStep.SCRIPT:
            # Idea changed under the running animation: start over
            self._start_script_intro()

    # -- navigation ----------------------------------------------------

    def advance(self) -> bool:
        """Go one step forward (clamped at Export)."""
        if not self.can_advance:
            logger.debug(f"Advance from {self.step.name} refused")
            return False
        return self.go_to(self.step + 1)

    def retreat(self) -> bool:
        """Go one step back (clamped at Creative)."""
        return self.go_to(self.step - 1)

    def go_to(self, step: Union[int, WizardStep]) -> bool:
        """Jump to a step; out-of-range requests are clamped."""
        target = WizardStep.clamp(step)
        if target == self.step:
            return True

        logger.info(f"Wizard step {self.step.name} -> {target.name}")
        self._exit_step(self.step)
        self.step = target
        self._enter_step(target)
        self._notify()
        return True

    def restart(self) -> None:
        """Discard the project and start over from Creative."""
        self._exit_step(self.step)
        self.project = new_project(self._rng)
        self.loading = False
        self.agent_logs = []
        self.typewriter_index = TYPEWRITER_NOT_STARTED
        self.last_animated_idea = None
        self.active_cast_character = None
        self.previewed_scene = None
        self.step = WizardStep.CREATIVE
        self._notify()

    def shutdown(self) -> None:
        """Cancel every timer and request owned by the wizard."""
        self._exit_step(self.step)

    def _enter_step(self, step: WizardStep) -> None:
        if step == WizardStep.SCRIPT:
            self._start_script_intro()
        elif step == WizardStep.SHOOTING:
            self._open_shot_editor()
        elif step == WizardStep.EXPORT:
            self._start_export()

    def _exit_step(self, step: WizardStep) -> None:
        self._timers.cancel_all()
        if step == WizardStep.CASTING:
            self.active_cast_character = None
        elif step == WizardStep.SCENERY:
            self.previewed_scene = None
        elif step == WizardStep.SHOOTING and self.shot_editor is not None:
            self.shot_editor.close()
            self.shot_editor = None
        elif step == WizardStep.EXPORT and self.export is not None:
            self.export.cancel()
            self.export = None

    # -- creative / script ---------------------------------------------

    async def create_script(self) -> bool:
        """
        Generate a script for the current genre and idea.

        Returns:
            False if generation was refused (blank idea or already running)
        """
        if not self.can_generate:
            return False

        self.loading = True
        self._notify()
        try:
            result = await self.client.request_script(self.project.genre, self.project.idea)
        finally:
            self.loading = False

        lines = [
            line.model_copy(update={"duration": DEFAULT_SHOT_DURATION})
            for line in result.lines
        ]
        project = self.project.model_copy(
            update={"title": result.title, "script": lines, "cast": {}}
        )
        self.project = on_script_generated(project, self.actors, self.scenes)
        logger.info(f"Script '{self.project.title}' ready with {len(lines)} lines")

        if self.step == WizardStep.SCRIPT:
            self._start_script_intro()
            self._notify()
        else:
            self.go_to(WizardStep.SCRIPT)
        return True

    def _start_script_intro(self) -> None:
        self._timers.cancel_all()

        if self.project.idea == self.last_animated_idea:
            self.agent_logs = [SKIP_LOG]
            self.typewriter_index = len(self.project.script)
            return

        self.agent_logs = []
        self.typewriter_index = TYPEWRITER_NOT_STARTED
        pending = list(AGENT_LOGS)

        def tick_log() -> bool:
            if pending:
                self.agent_logs = [*self.agent_logs, pending.pop(0)]
                self._notify()
                return True
            self.typewriter_index = 0
            self.last_animated_idea = self.project.idea
            self._notify()
            self._start_typewriter()
            return False

        self._timers.every("agent-log", self.config.timing.log_interval, tick_log)

    def _start_typewriter(self) -> None:
        def tick_reveal() -> bool:
            total = len(self.project.script)
            if self.typewriter_index >= total:
                return False
            self.typewriter_index += 1
            self._notify()
            return self.typewriter_index < total

        if self.typewriter_index < len(self.project.script):
            self._timers.every("typewriter", self.config.timing.typewriter_interval, tick_reveal)

    # -- casting / scenery ---------------------------------------------

    def open_cast_picker(self, character: str) -> None:
        if character in self.characters:
            self.active_cast_character = character
            self._notify()

    def close_cast_picker(self) -> None:
        self.active_cast_character = None
        self._notify()

    def set_actor(self, character: str, actor: Union[Actor, str]) -> bool:
        """Assign an actor (or actor id) to a character and close the picker."""
        if isinstance(actor, str):
            actor = get_actor(actor, self.actors)
        if actor is None or character not in self.characters:
            return False
        self.project = assign_actor(self.project, character, actor)
        self.active_cast_character = None
        self._notify()
        return True

    def select_scene(self, scene: Union[SetScene, str]) -> bool:
        if isinstance(scene, str):
            scene = get_scene(scene, self.scenes)
        if scene is None:
            return False
        self.project = select_scene(self.project, scene)
        self._notify()
        return True

    def preview_scene(self, scene_id: str) -> None:
        self.previewed_scene = get_scene(scene_id, self.scenes)
        self._notify()

    def close_preview(self) -> None:
        self.previewed_scene = None
        self._notify()

    # -- shooting / export ---------------------------------------------

    def _open_shot_editor(self) -> None:
        self.shot_editor = ShotEditor(
            get_project=lambda: self.project,
            update_project=self.update_project,
            client=self.client,
            on_back=self.retreat,
            on_export=lambda: self.go_to(WizardStep.EXPORT),
            on_change=self._notify,
        )
        self.shot_editor.start()

    def _start_export(self) -> None:
        self.export = ExportSimulation(
            interval=self.config.timing.export_interval,
            on_change=self._notify,
        )
        self.export.start()

    def back_to_edit(self) -> None:
        self.go_to(WizardStep.SHOOTING)

    def _notify(self) -> None:
        if self._on_change:
            self._on_change()
