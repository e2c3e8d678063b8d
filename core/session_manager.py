import streamlit as st

# Which patient the form / history pages operate on, and in which mode
EDITING_PATIENT_KEY = "editing_patient_id"
NEW_VISIT_KEY = "is_new_visit"
HISTORY_PATIENT_KEY = "history_patient_id"


def init_session_state():
    """Ensure required session keys exist."""
    if EDITING_PATIENT_KEY not in st.session_state:
        st.session_state[EDITING_PATIENT_KEY] = None
    if NEW_VISIT_KEY not in st.session_state:
        st.session_state[NEW_VISIT_KEY] = False
    if HISTORY_PATIENT_KEY not in st.session_state:
        st.session_state[HISTORY_PATIENT_KEY] = None


def start_new_patient():
    st.session_state[EDITING_PATIENT_KEY] = None
    st.session_state[NEW_VISIT_KEY] = False


def start_profile_edit(patient_id: str):
    st.session_state[EDITING_PATIENT_KEY] = patient_id
    st.session_state[NEW_VISIT_KEY] = False


def start_new_visit(patient_id: str):
    st.session_state[EDITING_PATIENT_KEY] = patient_id
    st.session_state[NEW_VISIT_KEY] = True


def show_history(patient_id: str):
    st.session_state[HISTORY_PATIENT_KEY] = patient_id


def clear_form_state():
    """Reset form mode without redirect."""
    st.session_state.pop(EDITING_PATIENT_KEY, None)
    st.session_state.pop(NEW_VISIT_KEY, None)
