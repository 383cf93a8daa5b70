"""Tests for data models."""

import pytest

from shotmaker.models.catalog import ACTORS_POOL, GENRES, INSPIRATIONS, SCENES, get_actor, get_scene, random_inspiration
from shotmaker.models.schemas import (
    CameraAngle,
    GeneratedScript,
    ProjectData,
    ScriptLine,
    WizardStep,
)


class TestWizardStep:
    def test_wizard_steps_exist(self):
        """Test that all wizard steps are defined in order."""
        steps = list(WizardStep)
        assert len(steps) == 6
        assert steps[0] == WizardStep.CREATIVE
        assert steps[-1] == WizardStep.EXPORT
        assert [int(s) for s in steps] == [0, 1, 2, 3, 4, 5]

    @pytest.mark.parametrize("value,expected", [
        (-3, WizardStep.CREATIVE),
        (0, WizardStep.CREATIVE),
        (4, WizardStep.SHOOTING),
        (6, WizardStep.EXPORT),
        (99, WizardStep.EXPORT),
    ])
    def test_clamp(self, value, expected):
        assert WizardStep.clamp(value) == expected


class TestCameraAngle:
    def test_exact_values(self):
        assert CameraAngle.parse("Wide") == CameraAngle.WIDE
        assert CameraAngle.parse("Close-up") == CameraAngle.CLOSE_UP

    def test_loose_spelling(self):
        assert CameraAngle.parse("close up") == CameraAngle.CLOSE_UP
        assert CameraAngle.parse("over the shoulder") == CameraAngle.OVER_THE_SHOULDER

    def test_unknown_falls_back_to_medium(self):
        assert CameraAngle.parse("dutch tilt") == CameraAngle.MEDIUM
        assert CameraAngle.parse("") == CameraAngle.MEDIUM


class TestScriptLine:
    def test_line_defaults(self):
        line = ScriptLine(id="1", character="Aria", dialogue="Hello")
        assert line.duration == 3.0
        assert line.visual_url is None
        assert line.camera_angle == CameraAngle.MEDIUM

    def test_effective_duration_falls_back(self):
        assert ScriptLine(id="1", character="A", dialogue="", duration=None).effective_duration == 3.0
        assert ScriptLine(id="1", character="A", dialogue="", duration=0).effective_duration == 3.0
        assert ScriptLine(id="1", character="A", dialogue="", duration=float("nan")).effective_duration == 3.0
        assert ScriptLine(id="1", character="A", dialogue="", duration=2.5).effective_duration == 2.5


class TestProjectData:
    def test_initial_project(self):
        project = ProjectData()
        assert project.title
        assert project.idea == ""
        assert project.script == []
        assert project.cast == {}
        assert project.scene is None

    def test_can_generate_requires_idea(self):
        assert not ProjectData(idea="").can_generate
        assert not ProjectData(idea="   ").can_generate
        assert ProjectData(idea="A heist on Mars").can_generate

    def test_total_duration(self, line_factory):
        project = ProjectData(script=[
            line_factory("1", "A", 3.0),
            line_factory("2", "B", 2.5),
            line_factory("3", "C", 4.0),
        ])
        assert project.total_duration == pytest.approx(9.5)


class TestGeneratedScript:
    def test_empty_script(self):
        script = GeneratedScript(title="Fallback")
        assert script.is_empty
        assert script.lines == []


class TestCatalog:
    def test_catalog_sizes(self):
        assert len(ACTORS_POOL) == 4
        assert len(SCENES) == 3
        assert len(GENRES) == 3
        assert len(INSPIRATIONS) == 7

    def test_actor_ids_unique(self):
        assert len({actor.id for actor in ACTORS_POOL}) == len(ACTORS_POOL)

    def test_catalog_entries_are_frozen(self):
        with pytest.raises(Exception):
            ACTORS_POOL[0].name = "Someone else"

    def test_lookup(self):
        assert get_actor("2").name == "Aria"
        assert get_actor("missing") is None
        assert get_scene(SCENES[1].id) == SCENES[1]
        assert get_scene("missing") is None

    def test_lookup_in_custom_pool(self):
        pool = [ACTORS_POOL[3]]
        assert get_actor(ACTORS_POOL[3].id, pool) == ACTORS_POOL[3]
        assert get_actor(ACTORS_POOL[0].id, pool) is None
        assert get_scene(SCENES[0].id, []) is None

    def test_random_inspiration(self, rng):
        assert random_inspiration(rng) in INSPIRATIONS
