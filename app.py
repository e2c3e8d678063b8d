import streamlit as st

from core.errors import ImportFormatError
from core.session_manager import start_new_patient, start_new_visit
from core.time_utils import today
from core.ui import setup_page
from services.export_service import backup_filename, csv_export_filename, export_csv, export_json
from services.import_service import import_backup
from services.reminder_service import compute_reminders, split_overdue


def go_to(page_path: str):
    st.switch_page(page_path)


def render_reminder(reminder, key_prefix: str):
    cols = st.columns([4, 2, 2])
    with cols[0]:
        st.write(f"**{reminder.patient_name}**")
        st.caption(f"Due {reminder.due_date.isoformat()}")
    with cols[1]:
        if reminder.is_overdue:
            st.error(f"Overdue {-reminder.days_remaining} day(s)")
        elif reminder.days_remaining == 0:
            st.warning("Due today")
        else:
            st.info(f"In {reminder.days_remaining} day(s)")
    with cols[2]:
        # Clicking a reminder goes straight to recording the visit
        if st.button("Record Visit", key=f"{key_prefix}_{reminder.patient_id}"):
            start_new_visit(reminder.patient_id)
            go_to("pages/2_Patient_Form.py")


def main():
    st.set_page_config(
        page_title="Epilepsy Follow-up",
        page_icon="🧠",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    store = setup_page()
    patients = store.get_all()
    current = today()

    cols = st.columns([4, 2])
    with cols[0]:
        st.title("Pediatric Epilepsy Follow-up")
    with cols[1]:
        if st.button("New Patient Record", type="primary", use_container_width=True):
            start_new_patient()
            go_to("pages/2_Patient_Form.py")

    reminders = compute_reminders(patients, current)
    overdue, upcoming = split_overdue(reminders)

    m1, m2, m3 = st.columns(3)
    m1.metric("Patients", len(patients))
    m2.metric("Overdue", len(overdue))
    m3.metric("Due within 14 days", len(upcoming))

    st.write("---")
    st.subheader("Follow-up Reminders")

    if not reminders:
        st.info("No follow-ups due in the next two weeks.")
    for r in reminders:
        render_reminder(r, key_prefix="reminder")

    st.write("---")
    st.subheader("Data Management")

    c1, c2, c3 = st.columns(3)
    with c1:
        st.download_button(
            "Export CSV",
            data=export_csv(patients).encode("utf-8"),
            file_name=csv_export_filename(current),
            mime="text/csv",
            disabled=not patients,
            use_container_width=True,
        )
    with c2:
        st.download_button(
            "Full Backup (JSON)",
            data=export_json(patients).encode("utf-8"),
            file_name=backup_filename(current),
            mime="application/json",
            use_container_width=True,
        )
    with c3:
        uploaded = st.file_uploader("Import backup", type=["json"], label_visibility="collapsed")
        if uploaded is not None and st.button("Import", use_container_width=True):
            try:
                added = import_backup(store, uploaded.getvalue())
                st.success(f"Import complete. {added} new record(s) added.")
                st.rerun()
            except ImportFormatError:
                st.error("File format error: the file could not be parsed.")


if __name__ == "__main__":
    main()
