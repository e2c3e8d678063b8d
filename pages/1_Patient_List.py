import streamlit as st

from core.session_manager import show_history, start_new_visit, start_profile_edit
from core.ui import setup_page
from services.insights_service import cohort_insights, search_patients
from services.patient_service import delete_patient, delete_patients, list_patients

store = setup_page()

st.title("Patient Search")
st.write("Search by name, ID card, phone, diagnosis, syndrome or medication.")

# Search bar and creation-date window
c1, c2, c3 = st.columns([3, 1, 1])
with c1:
    search_query = st.text_input("Search", placeholder="e.g., Levetiracetam or Dravet")
with c2:
    created_from = st.date_input("Created from", value=None)
with c3:
    created_to = st.date_input("Created to", value=None)

patients = search_patients(list_patients(store), search_query, created_from, created_to)

# Cohort insights for the current filter
with st.expander("Cohort Insights", expanded=False):
    stats = cohort_insights(patients)
    if stats is None:
        st.info("No patients match the current filter.")
    else:
        s1, s2, s3 = st.columns(3)
        with s1:
            st.metric("Patients", stats.total)
            for label, count in stats.gender_counts.items():
                st.write(f"{label}: **{count}**")
        with s2:
            st.markdown("**Age groups**")
            st.bar_chart({"patients": stats.age_groups})
        with s3:
            st.markdown("**Top medications**")
            for name, count in stats.top_medications:
                st.write(f"{name}: **{count}**")

if not patients:
    st.info("No patients found.")
    st.stop()

selected_ids = []

for p in patients:
    with st.container():
        left, right = st.columns([4, 3])
        with left:
            if st.checkbox(f"**{p.name}**  —  {p.diagnosis}", key=f"sel_{p.id}"):
                selected_ids.append(p.id)
            st.caption(f"Age: {p.age} • Gender: {p.gender.label} • Phone: {p.phone or '—'}")
            active = ", ".join(m.name for m in p.active_medications)
            st.write(f"Current ASM: {active or '—'}")
        with right:
            b1, b2, b3, b4 = st.columns(4)
            if b1.button("History", key=f"history_{p.id}"):
                show_history(p.id)
                st.switch_page("pages/3_Patient_History.py")
            if b2.button("New Visit", key=f"visit_{p.id}"):
                start_new_visit(p.id)
                st.switch_page("pages/2_Patient_Form.py")
            if b3.button("Edit", key=f"edit_{p.id}"):
                start_profile_edit(p.id)
                st.switch_page("pages/2_Patient_Form.py")
            if b4.button("Delete", key=f"delete_{p.id}"):
                st.session_state["pending_delete"] = [p.id]
        st.markdown("---")

if selected_ids and st.button(f"Delete {len(selected_ids)} selected patient(s)"):
    st.session_state["pending_delete"] = selected_ids

# Danger zone: deletion needs typed confirmation
pending = st.session_state.get("pending_delete")
if pending:
    st.warning(f"Permanently delete {len(pending)} patient record(s)? This cannot be undone.")
    confirm = st.text_input("Type DELETE to confirm", value="", key="confirm_delete")
    d1, d2 = st.columns(2)
    with d1:
        if st.button("Confirm Delete", type="primary"):
            if confirm.strip().upper() == "DELETE":
                if len(pending) == 1:
                    delete_patient(store, pending[0])
                else:
                    delete_patients(store, pending)
                st.session_state.pop("pending_delete", None)
                st.success("Patient record(s) deleted.")
                st.rerun()
            else:
                st.error("Confirmation text does not match DELETE.")
    with d2:
        if st.button("Cancel"):
            st.session_state.pop("pending_delete", None)
            st.rerun()
