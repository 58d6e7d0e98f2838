"""
Sports Activity Hub
Bookings, event registrations and live reports
"""
import logging
import streamlit as st

from sportshub.ui.dashboard import render_dashboard
from sportshub.utils.config import load_settings

logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="Sports Activity Hub",
    page_icon="🏅",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def configure_logging():
    """Set the root log level from SAS_LOG_LEVEL."""
    level = getattr(logging, load_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def initialize_session_state():
    """Initialize session state defaults."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "dashboard"


def apply_custom_css():
    """Apply custom CSS styles."""
    st.markdown("""
        <style>
        .stApp {
            background: linear-gradient(135deg, #0f0c29 0%, #1a1a2e 50%, #16213e 100%);
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}

        .stButton > button {
            border-radius: 12px;
            font-weight: 600;
            border: none;
        }

        .report-card {
            background: rgba(15, 17, 40, 0.92);
            border: 1px solid rgba(148, 163, 184, 0.18);
            border-radius: 16px;
            padding: 18px;
            text-align: center;
        }

        .report-card__title {
            font-size: 14px;
            letter-spacing: 0.05em;
            color: #cbd5f5;
            margin: 0 0 8px;
        }

        .report-card__value {
            font-size: 28px;
            font-weight: 800;
            color: #ffdd57;
            margin: 0;
        }
        </style>
    """, unsafe_allow_html=True)


def render_current_page():
    """Render the page selected in session state."""
    try:
        if st.session_state.current_page == "dashboard":
            render_dashboard()
        else:
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Back to dashboard"):
                st.session_state.current_page = "dashboard"
                st.rerun()

    except Exception as e:
        # Error boundary
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong, please try again.")

        with st.expander("🔍 Error details"):
            st.code(str(e))


def main():
    """Application entry point."""
    try:
        configure_logging()
        initialize_session_state()
        apply_custom_css()
        render_current_page()
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("The application hit an error, please reload the page.")
        st.code(str(e))

        if st.button("🔄 Reload"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
