"""Tests for cast and scene derivation."""

from shotmaker.models.catalog import ACTORS_POOL, SCENES
from shotmaker.models.schemas import ProjectData
from shotmaker.services.casting import (
    assign_actor,
    default_cast,
    on_script_generated,
    select_scene,
    uncast_characters,
    unique_characters,
)


class TestUniqueCharacters:
    def test_first_appearance_order(self, sample_lines):
        assert unique_characters(sample_lines) == ["A", "B", "C"]

    def test_empty(self):
        assert unique_characters([]) == []


class TestDefaultCast:
    def test_round_robin_wraps(self):
        characters = [f"C{i}" for i in range(6)]
        cast = default_cast(characters, ACTORS_POOL)
        assert cast["C0"] == ACTORS_POOL[0]
        assert cast["C3"] == ACTORS_POOL[3]
        assert cast["C4"] == ACTORS_POOL[0]
        assert cast["C5"] == ACTORS_POOL[1]

    def test_no_actors(self):
        assert default_cast(["A"], []) == {}


class TestOnScriptGenerated:
    def test_assigns_catalog_order(self, sample_lines):
        project = ProjectData(idea="x", script=sample_lines)

        result = on_script_generated(project, ACTORS_POOL, SCENES)

        assert result.cast == {
            "A": ACTORS_POOL[0],
            "B": ACTORS_POOL[1],
            "C": ACTORS_POOL[2],
        }
        assert result.scene == SCENES[0]

    def test_noop_without_script(self):
        project = ProjectData(idea="x")
        assert on_script_generated(project, ACTORS_POOL, SCENES) is project

    def test_does_not_clobber_existing_cast(self, sample_lines):
        project = ProjectData(idea="x", script=sample_lines)
        project = on_script_generated(project, ACTORS_POOL, SCENES)
        project = assign_actor(project, "B", ACTORS_POOL[3])

        again = on_script_generated(project, ACTORS_POOL, SCENES)

        assert again is project
        assert again.cast["B"] == ACTORS_POOL[3]

    def test_does_not_mutate_input(self, sample_lines):
        project = ProjectData(idea="x", script=sample_lines)
        on_script_generated(project, ACTORS_POOL, SCENES)
        assert project.cast == {}
        assert project.scene is None


class TestOverrides:
    def test_assign_actor_only_touches_one_character(self, sample_lines):
        project = on_script_generated(ProjectData(script=sample_lines), ACTORS_POOL, SCENES)

        updated = assign_actor(project, "B", ACTORS_POOL[3])

        assert updated.cast["B"] == ACTORS_POOL[3]
        assert updated.cast["A"] == ACTORS_POOL[0]
        assert updated.cast["C"] == ACTORS_POOL[2]
        assert project.cast["B"] == ACTORS_POOL[1]

    def test_select_scene(self):
        project = select_scene(ProjectData(), SCENES[2])
        assert project.scene == SCENES[2]

    def test_uncast_characters(self, sample_lines):
        project = ProjectData(script=sample_lines, cast={"A": ACTORS_POOL[0]})
        assert uncast_characters(project) == ["B", "C"]
