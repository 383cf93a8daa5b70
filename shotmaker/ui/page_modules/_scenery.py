"""Scenery page - Step 3 of the wizard."""

import streamlit as st

from shotmaker.ui.components.state import advance_step, call, get_controller, retreat_step


def _on_scene_change() -> None:
    controller = get_controller()
    call(controller.select_scene, st.session_state.scene_input)


def render_scenery_page() -> None:
    """Render the set selection page."""
    controller = get_controller()
    project = controller.project
    scene_ids = [scene.id for scene in controller.scenes]
    names = {scene.id: scene.name for scene in controller.scenes}

    st.header("Studio")
    if project.scene:
        st.markdown(f"The AI recommends **{project.scene.name}** as the main stage.")

    current = project.scene.id if project.scene and project.scene.id in scene_ids else scene_ids[0]
    st.radio(
        "Set",
        scene_ids,
        index=scene_ids.index(current),
        format_func=lambda scene_id: names[scene_id],
        horizontal=True,
        key="scene_input",
        on_change=_on_scene_change,
    )

    if project.scene:
        st.image(project.scene.image_url, width="stretch")
        st.subheader(project.scene.name)
        st.markdown(project.scene.description)
        if st.button("Panorama preview"):
            call(controller.preview_scene, project.scene.id)
            st.rerun()

    previewed = controller.previewed_scene
    if previewed:
        with st.expander(f"Preview: {previewed.name}", expanded=True):
            st.image(previewed.image_url, width="stretch")
            if st.button("Close preview"):
                call(controller.close_preview)
                st.rerun()

    st.markdown("---")
    col_back, col_next = st.columns(2)
    with col_back:
        if st.button("Back"):
            retreat_step()
            st.rerun()
    with col_next:
        if st.button("Start shooting", type="primary"):
            advance_step()
            st.rerun()
