"""Script review page - Step 1 of the wizard."""

import streamlit as st

from shotmaker.ui.components.state import advance_step, get_controller, retreat_step


def render_script_page() -> None:
    """Render the script review page with the agent log and typewriter reveal."""
    controller = get_controller()
    project = controller.project

    st.header(project.title)

    col_script, col_log = st.columns([2, 1])

    with col_script:
        st.subheader("Script")
        if not project.script and controller.script_revealed:
            st.warning("The AI returned no script lines. Go back and try again, or continue without shots.")
        for line in controller.visible_lines:
            st.markdown(
                f"**{line.character}** · *{line.camera_angle.value}*  \n"
                f"{line.dialogue}  \n"
                f":grey[{line.action}]"
            )

    with col_log:
        st.subheader("Agent collaboration")
        for log in controller.agent_logs:
            st.code(log, language=None)

    st.markdown("---")
    col_back, col_next = st.columns(2)
    with col_back:
        if st.button("Back"):
            retreat_step()
            st.rerun()
    with col_next:
        if controller.script_revealed:
            if st.button("Continue to casting", type="primary"):
                advance_step()
                st.rerun()
