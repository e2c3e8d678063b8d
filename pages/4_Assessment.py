import streamlit as st

from core.errors import FollowUpError
from core.ui import setup_page
from services.assessment_service import record_assessment, score_total
from services.patient_service import list_patients

store = setup_page()

st.title("Quality of Life Assessment (QOLIE)")

patients = list_patients(store)
if not patients:
    st.info("No patients registered yet.")
    st.stop()

by_id = {p.id: p for p in patients}
patient_id = st.selectbox(
    "Patient",
    list(by_id),
    format_func=lambda pid: f"{by_id[pid].name} ({by_id[pid].age} y)",
)

SCORE_LABELS = {
    "emotional": "Emotional well-being",
    "social": "Social functioning",
    "seizure": "Seizure worry",
    "side_effect": "Medication side effects",
    "overall": "Overall quality of life",
}

scores = {}
for field, label in SCORE_LABELS.items():
    scores[field] = st.slider(label, min_value=0, max_value=10, value=5, key=f"qol_{field}")

notes = st.text_area("Notes", key="qol_notes")

st.metric("Total score", f"{score_total(scores)} / 100")

saved = st.session_state.pop("qol_saved", None)
if saved is not None:
    st.success(f"Assessment saved ({saved} / 100).")

if st.button("Save Assessment", type="primary"):
    try:
        record = record_assessment(store, patient_id, scores, notes)
    except FollowUpError as e:
        st.error(str(e))
    else:
        # Rerun so the history below is read back from the store
        st.session_state["qol_saved"] = record.total_score
        st.rerun()

history = by_id[patient_id].assessment_history
if history:
    st.subheader("Previous assessments")
    for a in reversed(history):
        st.write(f"{a.assessed_on.isoformat()}: **{a.total_score}** {a.notes}")
