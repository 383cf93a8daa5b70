"""Casting page - Step 2 of the wizard."""

import streamlit as st

from shotmaker.services.casting import uncast_characters
from shotmaker.ui.components.state import advance_step, call, get_controller, retreat_step


def render_casting_page() -> None:
    """Render the casting page."""
    controller = get_controller()
    project = controller.project

    st.header("Casting")
    st.markdown("Every character gets an actor. Click a character to recast.")

    characters = controller.characters
    if not characters:
        st.warning("There are no characters yet. Generate a script first.")

    cols = st.columns(max(1, min(len(characters), 4)))
    for idx, character in enumerate(characters):
        actor = project.cast.get(character)
        with cols[idx % len(cols)]:
            st.subheader(character)
            if actor:
                st.image(actor.avatar_url, width=160)
                st.markdown(f"**{actor.name}**  \n{actor.description}")
                st.caption(f"{actor.gender}, {actor.age} · {actor.voice} · {actor.tone}")
            if st.button("Recast", key=f"recast_{character}"):
                call(controller.open_cast_picker, character)
                st.rerun()

    active = controller.active_cast_character
    if active:
        st.markdown("---")
        st.subheader(f"Choose an actor for {active}")
        actor_cols = st.columns(len(controller.actors))
        for col, actor in zip(actor_cols, controller.actors):
            with col:
                st.image(actor.avatar_url, width=120)
                st.markdown(f"**{actor.name}**")
                st.caption(actor.description)
                if st.button("Cast", key=f"cast_{active}_{actor.id}"):
                    call(controller.set_actor, active, actor.id)
                    st.rerun()
        if st.button("Cancel"):
            call(controller.close_cast_picker)
            st.rerun()

    missing = uncast_characters(project)
    if missing:
        st.warning(f"Not cast yet: {', '.join(missing)}")

    st.markdown("---")
    col_back, col_next = st.columns(2)
    with col_back:
        if st.button("Back"):
            retreat_step()
            st.rerun()
    with col_next:
        if st.button(
            "Confirm cast, continue to set",
            type="primary",
            disabled=not controller.can_advance,
        ):
            advance_step()
            st.rerun()
