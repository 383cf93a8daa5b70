"""Cast and scene derivation for a generated script.

These are plain state transitions over ProjectData. The wizard calls
`on_script_generated` exactly once per generation; user overrides go through
`assign_actor` and `select_scene`.
"""

import logging
from typing import Sequence

from shotmaker.models.schemas import Actor, ProjectData, ScriptLine, SetScene

logger = logging.getLogger(__name__)


def unique_characters(lines: Sequence[ScriptLine]) -> list[str]:
    """Distinct character names in order of first appearance."""
    return list(dict.fromkeys(line.character for line in lines))


def default_cast(characters: Sequence[str], actors: Sequence[Actor]) -> dict[str, Actor]:
    """Assign actors round-robin in catalog order."""
    if not actors:
        return {}
    return {
        character: actors[idx % len(actors)]
        for idx, character in enumerate(characters)
    }


def on_script_generated(
    project: ProjectData,
    actors: Sequence[Actor],
    scenes: Sequence[SetScene],
) -> ProjectData:
    """
    Apply cast and scene defaults after a script generation.

    Only fills in defaults when there is a script and the cast is still
    empty, so calling it again never clobbers a user's reassignment.

    Args:
        project: The project right after the new script was stored
        actors: Actor catalog to draw from
        scenes: Scene catalog; the first entry becomes the active scene

    Returns:
        The updated project (the same object when nothing applies)
    """
    if not project.script or project.cast:
        return project

    characters = unique_characters(project.script)
    cast = default_cast(characters, actors)
    scene = scenes[0] if scenes else project.scene

    logger.info(
        f"Default cast for {len(characters)} characters: "
        + ", ".join(f"{name} -> {actor.name}" for name, actor in cast.items())
    )
    return project.model_copy(update={"cast": cast, "scene": scene})


def assign_actor(project: ProjectData, character: str, actor: Actor) -> ProjectData:
    """Reassign one character, leaving every other entry untouched."""
    cast = {**project.cast, character: actor}
    return project.model_copy(update={"cast": cast})


def select_scene(project: ProjectData, scene: SetScene) -> ProjectData:
    """Make `scene` the project's active backdrop."""
    return project.model_copy(update={"scene": scene})


def uncast_characters(project: ProjectData) -> list[str]:
    """Characters that appear in the script but have no actor yet."""
    return [name for name in unique_characters(project.script) if name not in project.cast]
