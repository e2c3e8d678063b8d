import streamlit as st

from core.helpers import visit_label
from core.session_manager import HISTORY_PATIENT_KEY, start_new_visit
from core.ui import setup_page
from services.assessment_service import assessment_trend
from services.patient_service import get_patient, visit_history_newest_first

store = setup_page()

st.title("Patient Visit History")

# Ensure a patient is selected from previous page
patient_id = st.session_state.get(HISTORY_PATIENT_KEY)
patient = get_patient(store, patient_id) if patient_id else None

if not patient:
    st.error("No patient selected. Please go back to the patient list.")
    if st.button("Back to Patient Search"):
        st.switch_page("pages/1_Patient_List.py")
    st.stop()

st.subheader(patient.name)
st.caption(
    f"Age: {patient.age} • Gender: {patient.gender.label} • Diagnosis: {patient.diagnosis}"
    + (f" (since {patient.diagnosis_date.isoformat()})" if patient.diagnosis_date else "")
)
if patient.allergies:
    st.warning(f"Allergies: {patient.allergies}")

visits = visit_history_newest_first(patient)

if not visits:
    st.info("No visits recorded for this patient.")

for index, v in enumerate(visits):
    with st.container():
        st.markdown(f"#### {v.visit_date.isoformat()}  ·  {visit_label(index, len(visits))}")
        left, right = st.columns([3, 2])
        with left:
            cs = v.clinical_summary
            st.write(f"Syndrome: {cs.syndrome or '—'}")
            st.write(f"Seizure type: {cs.seizure_type or '—'}")
            st.write(f"EEG: {cs.eeg or '—'}")
            st.write(f"MRI: {cs.mri or '—'}")
            if cs.genetic:
                st.write(f"Genetic: {cs.genetic}")
            if cs.biochemical:
                st.write(f"Biochemistry: {cs.biochemical}")
            if cs.other:
                st.write(f"Other: {cs.other}")
        with right:
            st.markdown("**Medications**")
            for m in v.medications:
                stopped = f" (stopped {m.end_date.isoformat()})" if m.end_date else ""
                st.write(f"- {m.display()}{stopped}")
            fu = v.follow_up_config
            st.markdown("**Follow-up**")
            st.write(f"Every {fu.interval_months} month(s); next {fu.next_follow_up_date or '—'}")
            if fu.items:
                st.caption(", ".join(fu.items))
        st.markdown("---")

if patient.assessment_history:
    st.subheader("Quality of Life Assessments")
    st.line_chart(
        {"total score": assessment_trend(patient.assessment_history)},
    )

col1, col2 = st.columns(2)
with col1:
    if st.button("Back to Patient Search", use_container_width=True):
        st.switch_page("pages/1_Patient_List.py")
with col2:
    if st.button("Record New Visit", use_container_width=True):
        start_new_visit(patient.id)
        st.switch_page("pages/2_Patient_Form.py")
