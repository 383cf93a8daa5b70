"""Wizard progress indicator component."""

import streamlit as st

from shotmaker.models.schemas import WizardStep


# Shooting and Export are full-screen sub-applications without the header
STEPS = [
    (WizardStep.CREATIVE, "Creative", "Pick a genre and describe your idea"),
    (WizardStep.SCRIPT, "Script", "Watch the AI crew write your script"),
    (WizardStep.CASTING, "Casting", "Assign an actor to every character"),
    (WizardStep.SCENERY, "Studio", "Choose the set for the shoot"),
]


def render_wizard_progress(current_step: WizardStep) -> None:
    """
    Render the wizard progress indicator.

    Args:
        current_step: The current wizard step
    """
    st.markdown("---")

    cols = st.columns(len(STEPS))

    for col, (step, label, description) in zip(cols, STEPS):
        with col:
            if step < current_step:
                # Completed step
                st.markdown(f"### :white_check_mark: {label}")
            elif step == current_step:
                # Current step
                st.markdown(f"### :large_blue_circle: **{label}**")
                st.caption(description)
            else:
                # Future step
                st.markdown(f"### :white_circle: {label}")

    st.markdown("---")

