"""Creative page - Step 0 of the wizard."""

import streamlit as st

from shotmaker.models.catalog import GENRES
from shotmaker.ui.components.state import call, get_controller, get_runtime


def _on_idea_change() -> None:
    controller = get_controller()
    call(controller.set_idea, st.session_state.idea_input)


def _on_genre_change() -> None:
    controller = get_controller()
    call(controller.set_genre, st.session_state.genre_input)


def render_creative_page() -> None:
    """Render the creative idea page."""
    controller = get_controller()
    project = controller.project

    st.header("What do you want to shoot?")
    st.markdown(
        "Pick a genre and describe your idea. The AI writer, director and "
        "producer will turn it into a short script."
    )

    st.radio(
        "Genre",
        GENRES,
        index=GENRES.index(project.genre) if project.genre in GENRES else 0,
        horizontal=True,
        key="genre_input",
        on_change=_on_genre_change,
    )

    # Keep the widget in sync when the project was reset or seeded
    if st.session_state.get("idea_input") is None:
        st.session_state.idea_input = project.idea

    st.text_area(
        "Idea",
        placeholder="Describe your shooting inspiration...",
        height=150,
        key="idea_input",
        on_change=_on_idea_change,
    )

    label = "AI crew at work..." if controller.loading else "Start AI creation"
    if st.button(label, type="primary", disabled=not controller.can_generate):
        with st.spinner("AI crew at work..."):
            get_runtime().run(controller.create_script)
        st.rerun()
