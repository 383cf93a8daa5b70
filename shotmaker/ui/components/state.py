"""Session state management for Streamlit."""

import streamlit as st

from shotmaker.services.session_runtime import SessionRuntime
from shotmaker.services.wizard import WizardController


def init_session_state() -> None:
    """Start the session runtime on first use."""
    runtime = st.session_state.get("runtime")
    if runtime is None or not runtime.alive:
        st.session_state.runtime = SessionRuntime()


def get_runtime() -> SessionRuntime:
    """Get the current session runtime."""
    init_session_state()
    return st.session_state.runtime


def get_controller() -> WizardController:
    """Get the wizard controller of this session."""
    return get_runtime().controller


def call(fn, *args, **kwargs):
    """Run a controller method on the session loop."""
    return get_runtime().call(fn, *args, **kwargs)


def advance_step() -> None:
    """Advance to the next wizard step."""
    controller = get_controller()
    call(controller.advance)


def retreat_step() -> None:
    """Go back one wizard step."""
    controller = get_controller()
    call(controller.retreat)


def reset_state() -> None:
    """Discard the project and start a new one."""
    controller = get_controller()
    call(controller.restart)
    for key in list(st.session_state.keys()):
        if key != "runtime":
            del st.session_state[key]


def render_project_sidebar() -> None:
    """Render a read-only summary of the current project."""
    controller = get_controller()
    project = controller.project

    with st.sidebar:
        st.subheader("Current Project")
        st.write(f"**Title:** {project.title}")
        st.write(f"**Genre:** {project.genre}")
        st.write(f"**Step:** {controller.step.name.title()}")

        if project.script:
            st.write(f"**Shots:** {len(project.script)} ({project.total_duration:.1f}s)")
        if project.cast:
            st.markdown("**Cast:**")
            for character, actor in project.cast.items():
                st.markdown(f"- {character}: {actor.name}")
        if project.scene:
            st.write(f"**Scene:** {project.scene.name}")

        st.markdown("---")
        st.caption("Nothing is saved: closing the tab discards the project.")
        if st.button("Start Over"):
            reset_state()
            st.rerun()
