"""Export page - Step 5 of the wizard."""

import streamlit as st

from shotmaker.ui.components.state import call, get_controller, reset_state


def render_export_page() -> None:
    """Render the simulated render progress and the final summary."""
    controller = get_controller()
    export = controller.export
    project = controller.project

    if export is None:
        st.warning("No export in progress.")
        return

    if not export.completed:
        st.header(f"Rendering «{project.title}»...")
        st.progress(export.progress / 100, text=f"{export.progress}%")
        st.caption(f"Exporting {controller.export_summary.file_name}")
        return

    if not st.session_state.get("export_celebrated"):
        st.balloons()
        st.session_state.export_celebrated = True

    summary = controller.export_summary
    st.header("Render completed")
    st.markdown(f"«{summary.title}» was rendered and saved.")

    st.image(summary.cover_url, width="stretch")
    st.markdown(f"{summary.genre} • {summary.scene_name} • {summary.renderer}")

    col1, col2, col3 = st.columns(3)
    col1.metric("Shots", summary.shot_count)
    col2.metric("Runtime", f"{summary.total_duration:.1f}s")
    col3.metric("Output", summary.file_name)

    st.markdown("---")
    col_edit, col_new = st.columns(2)
    with col_edit:
        if st.button("Back to editing"):
            st.session_state.export_celebrated = False
            call(controller.back_to_edit)
            st.rerun()
    with col_new:
        if st.button("Start New Project", type="primary"):
            reset_state()
            st.rerun()
