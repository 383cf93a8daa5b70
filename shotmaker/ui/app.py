"""Main Streamlit application for Shotmaker."""

import logging
import time

import streamlit as st

# Configure logging to show INFO level for our services
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
# Reduce noise from other loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("google_genai").setLevel(logging.WARNING)

from shotmaker.config import config
from shotmaker.models.schemas import WizardStep
from shotmaker.ui.components.state import (
    init_session_state,
    get_controller,
    render_project_sidebar,
)
from shotmaker.ui.components.wizard import render_wizard_progress
from shotmaker.ui.page_modules._creative import render_creative_page
from shotmaker.ui.page_modules._script import render_script_page
from shotmaker.ui.page_modules._casting import render_casting_page
from shotmaker.ui.page_modules._scenery import render_scenery_page
from shotmaker.ui.page_modules._shooting import render_shooting_page
from shotmaker.ui.page_modules._export import render_export_page


PAGES = {
    WizardStep.CREATIVE: render_creative_page,
    WizardStep.SCRIPT: render_script_page,
    WizardStep.CASTING: render_casting_page,
    WizardStep.SCENERY: render_scenery_page,
}


def main():
    """Main application entry point."""
    # Page config
    st.set_page_config(
        page_title="Shotmaker - AI Filmmaking Studio",
        page_icon="🎬",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    # Initialize session state
    init_session_state()
    controller = get_controller()

    # Missing keys only degrade generation to placeholders
    for warning in config.validate():
        st.warning(warning)

    if controller.step == WizardStep.SHOOTING:
        # Shooting and Export are full-screen sub-applications
        render_shooting_page()
    elif controller.step == WizardStep.EXPORT:
        render_export_page()
    else:
        # Header
        st.title("🎬 Shotmaker")
        st.markdown("*From idea to storyboard with an AI film crew*")

        render_project_sidebar()
        render_wizard_progress(controller.step)
        PAGES[controller.step]()

    # Keep re-rendering while timers tick or stills are being generated
    if controller.is_animating:
        time.sleep(config.timing.ui_refresh_interval)
        st.rerun()


if __name__ == "__main__":
    main()
