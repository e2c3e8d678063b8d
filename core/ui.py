import streamlit as st

from core.database import init_db
from core.logging_config import configure_logging
from core.session_manager import init_session_state, start_new_patient
from services.storage_service import RecordStore, get_record_store


@st.cache_resource
def _bootstrap() -> RecordStore:
    configure_logging()
    init_db()
    return get_record_store()


def setup_page() -> RecordStore:
    """Common page setup: tables, session keys and sidebar. Returns the store."""
    store = _bootstrap()
    init_session_state()
    render_sidebar()
    return store


def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu.

    Sidebar is also collapsed by default via app-wide set_page_config.
    """
    st.markdown(
        """
        <style>
        /* Hide the auto-generated Pages section */
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar():
    """Render the app menu.

    Items:
    - Overview
    - Patient Search
    - New Patient
    - QoL Assessment
    """
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Epilepsy Follow-up")
        if st.button("Overview", use_container_width=True):
            st.switch_page("app.py")
        if st.button("Patient Search", use_container_width=True):
            st.switch_page("pages/1_Patient_List.py")
        if st.button("New Patient", use_container_width=True):
            start_new_patient()
            st.switch_page("pages/2_Patient_Form.py")
        st.divider()
        if st.button("QoL Assessment", use_container_width=True):
            st.switch_page("pages/4_Assessment.py")
