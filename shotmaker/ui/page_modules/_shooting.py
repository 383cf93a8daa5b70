"""Shooting editor page - Step 4 of the wizard."""

from typing import Optional

import streamlit as st

from shotmaker.models.schemas import CameraAngle
from shotmaker.services.shot_editor import ShotEditor
from shotmaker.ui.components.state import call, get_controller

ANGLES = [angle.value for angle in CameraAngle]

# Widget keys owned by this page; cleared whenever the editor closes
INPUT_PREFIX = "shot_input_"
TITLE_KEY = f"{INPUT_PREFIX}title"


def _editor() -> Optional[ShotEditor]:
    return get_controller().shot_editor


def _seed(key: str, value) -> None:
    """Give a widget its model value once; after that the widget owns it."""
    if key not in st.session_state:
        st.session_state[key] = value


def _clear_inputs() -> None:
    for key in list(st.session_state.keys()):
        if str(key).startswith(INPUT_PREFIX):
            del st.session_state[key]


def _on_title_change() -> None:
    editor = _editor()
    if editor is None:
        return
    call(editor.rename_project, st.session_state[TITLE_KEY])


def _on_dialogue_change(key: str) -> None:
    editor = _editor()
    if editor is None:
        return
    call(editor.edit_dialogue, st.session_state[key])


def _on_angle_change(key: str) -> None:
    editor = _editor()
    if editor is None:
        return
    call(editor.change_camera_angle, st.session_state[key])


def _on_duration_change(key: str) -> None:
    editor = _editor()
    if editor is None:
        return
    call(editor.set_duration, st.session_state[key])


def _on_action_commit(key: str) -> None:
    # text_input only reports a change once the field loses focus (or Enter)
    editor = _editor()
    if editor is None:
        return
    call(editor.edit_action, st.session_state[key])
    call(editor.commit_action)


def _leave(action) -> None:
    _clear_inputs()
    call(action)
    st.rerun()


def render_shooting_page() -> None:
    """Render the per-shot editor."""
    controller = get_controller()
    editor = controller.shot_editor
    project = controller.project

    if editor is None:
        st.warning("The shooting editor is not open.")
        return

    col_back, col_title, col_export = st.columns([1, 4, 1])
    with col_back:
        if st.button("Back"):
            _leave(editor.back)
    with col_title:
        _seed(TITLE_KEY, project.title)
        st.text_input(
            "Project title",
            key=TITLE_KEY,
            on_change=_on_title_change,
            label_visibility="collapsed",
        )
    with col_export:
        if st.button("Export", type="primary"):
            _leave(editor.export)

    line = editor.current_line
    if line is None:
        st.warning("The script has no shots to film.")
        return

    col_view, col_controls = st.columns([3, 1])

    with col_view:
        if line.visual_url:
            st.image(line.visual_url, width="stretch")
        else:
            st.info("No still yet for this shot.")
        if editor.is_generating(line.id):
            st.caption("Rendering still...")

    with col_controls:
        st.subheader(line.character)
        actor = project.cast.get(line.character)
        if actor:
            st.caption(f"Played by {actor.name}")

        dialogue_key = f"{INPUT_PREFIX}dialogue_{line.id}"
        _seed(dialogue_key, line.dialogue)
        st.text_area(
            "Dialogue",
            key=dialogue_key,
            on_change=_on_dialogue_change,
            args=(dialogue_key,),
        )

        angle_key = f"{INPUT_PREFIX}angle_{line.id}"
        _seed(angle_key, line.camera_angle.value)
        st.selectbox(
            "Camera angle",
            ANGLES,
            key=angle_key,
            on_change=_on_angle_change,
            args=(angle_key,),
        )

        duration_key = f"{INPUT_PREFIX}duration_{line.id}"
        _seed(duration_key, float(line.effective_duration))
        st.number_input(
            "Duration (s)",
            step=0.1,
            key=duration_key,
            on_change=_on_duration_change,
            args=(duration_key,),
        )

        action_key = f"{INPUT_PREFIX}action_{line.id}"
        _seed(action_key, line.action)
        st.text_input(
            "Action",
            key=action_key,
            on_change=_on_action_commit,
            args=(action_key,),
        )

    st.markdown("---")
    st.markdown(f"**{editor.current_progress:.1f}s / {editor.total_duration:.1f}s**")

    shot_cols = st.columns(len(editor.lines) + 1)
    for idx, (col, shot) in enumerate(zip(shot_cols, editor.lines)):
        with col:
            if shot.visual_url:
                st.image(shot.visual_url, width="stretch")
            label = f"▶ {idx + 1}" if idx == editor.current_index else str(idx + 1)
            if st.button(label, key=f"shot_{shot.id}"):
                call(editor.select, idx)
                st.rerun()
    with shot_cols[-1]:
        if st.button("Export clip", key="export_clip"):
            _leave(editor.export)
