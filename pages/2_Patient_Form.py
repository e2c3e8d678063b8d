import streamlit as st

from core.constants import COMMON_MEDICATIONS, FOLLOW_UP_ITEMS, OTHER_FOLLOW_UP_ITEM, SEIZURE_TYPES
from core.errors import FollowUpError
from core.session_manager import EDITING_PATIENT_KEY, NEW_VISIT_KEY, clear_form_state
from core.time_utils import add_months, calculate_age, today
from core.ui import setup_page
from models.draft import (
    CustomMedication,
    FollowUpDraft,
    KnownMedication,
    MedicationDraft,
    PatientDraft,
    UnsetMedication,
)
from models.patient import ClinicalSummary, Gender
from services.patient_service import SaveOutcome, draft_from_patient, get_patient, reconcile

OTHER_MEDICATION = "Other..."

store = setup_page()

patient_id = st.session_state.get(EDITING_PATIENT_KEY)
is_new_visit = bool(st.session_state.get(NEW_VISIT_KEY))
existing = get_patient(store, patient_id) if patient_id else None

if patient_id and existing is None:
    st.error("Patient not found.")
    clear_form_state()
    if st.button("Back to Patient Search"):
        st.switch_page("pages/1_Patient_List.py")
    st.stop()

if existing is None:
    st.title("New Patient Record")
    initial = PatientDraft(
        diagnosis_date=today(),
        medications=[MedicationDraft(start_date=today())],
        follow_up=FollowUpDraft(last_follow_up_date=today()),
    )
elif is_new_visit:
    st.title(f"New Visit: {existing.name}")
    initial = draft_from_patient(existing)
    # A new visit defaults to today rather than the previous visit date
    initial = initial.model_copy(
        update={"follow_up": initial.follow_up.model_copy(update={"last_follow_up_date": today()})}
    )
else:
    st.title(f"Edit Patient: {existing.name}")
    initial = draft_from_patient(existing)

# Widget keys are scoped to the record and mode so switching patients resets the form
scope = f"{patient_id or 'new'}_{'visit' if is_new_visit else 'profile'}"


def key(name: str) -> str:
    return f"{scope}_{name}"


# -----------------------------
# Demographics (read-only during a visit)
# -----------------------------
st.subheader("Patient Information" + (" (reference only)" if is_new_visit else ""))

c1, c2, c3, c4 = st.columns(4)
with c1:
    name = st.text_input("Full Name", value=initial.name, disabled=is_new_visit, key=key("name"))
with c2:
    genders = list(Gender)
    gender = st.selectbox(
        "Gender",
        genders,
        index=genders.index(initial.gender) if initial.gender else 0,
        format_func=lambda g: g.label,
        disabled=is_new_visit,
        key=key("gender"),
    )
with c3:
    birthday = st.date_input(
        "Birthday",
        value=initial.birthday,
        min_value=add_months(today(), -12 * 25),
        max_value=today(),
        disabled=is_new_visit,
        key=key("birthday"),
    )
with c4:
    st.metric("Age", f"{calculate_age(birthday, today())} years" if birthday else "—")

c1, c2, c3 = st.columns(3)
with c1:
    id_card = st.text_input("ID Card", value=initial.id_card, disabled=is_new_visit, key=key("id_card"))
with c2:
    phone = st.text_input("Phone", value=initial.phone, disabled=is_new_visit, key=key("phone"))
with c3:
    diagnosis_date = st.date_input("Diagnosis Date", value=initial.diagnosis_date, key=key("diagnosis_date"))

allergies = st.text_input("Allergies", value=initial.allergies, disabled=is_new_visit, key=key("allergies"))
family_history = st.text_input(
    "Family History", value=initial.family_history, disabled=is_new_visit, key=key("family_history")
)
diagnosis = st.text_input("Diagnosis", value=initial.diagnosis, key=key("diagnosis"))

# -----------------------------
# Medications
# -----------------------------
st.subheader("Medication for this Visit" if is_new_visit else "Medications (ASM)")

rows_key = key("med_rows")
if rows_key not in st.session_state:
    st.session_state[rows_key] = list(range(len(initial.medications)))

medication_rows = []
for row in list(st.session_state[rows_key]):
    seed = initial.medications[row] if row < len(initial.medications) else MedicationDraft(start_date=today())

    if isinstance(seed.name, KnownMedication):
        choice = seed.name.name
    elif isinstance(seed.name, CustomMedication):
        choice = OTHER_MEDICATION
    else:
        choice = ""
    options = ["", *COMMON_MEDICATIONS, OTHER_MEDICATION]

    m1, m2, m3, m4, m5, m6 = st.columns([3, 2, 2, 2, 2, 1])
    with m1:
        picked = st.selectbox(
            "Medication",
            options,
            index=options.index(choice) if choice in options else 0,
            format_func=lambda o: o or "Select medication...",
            key=key(f"med_{row}_name"),
        )
        if picked == OTHER_MEDICATION:
            custom_text = seed.name.text if isinstance(seed.name, CustomMedication) else ""
            med_name = CustomMedication(
                text=st.text_input("Medication name", value=custom_text, key=key(f"med_{row}_custom"))
            )
        elif picked:
            med_name = KnownMedication(name=picked)
        else:
            med_name = UnsetMedication()
    with m2:
        usage = st.text_input("Usage", value=seed.usage, placeholder="e.g. bid", key=key(f"med_{row}_usage"))
    with m3:
        dosage = st.text_input("Dosage", value=seed.dosage, placeholder="e.g. 0.25g", key=key(f"med_{row}_dosage"))
    with m4:
        start_date = st.date_input("Start", value=seed.start_date, key=key(f"med_{row}_start"))
    with m5:
        end_date = st.date_input("Stopped", value=seed.end_date, key=key(f"med_{row}_end"))
    with m6:
        if st.button("🗑️", key=key(f"med_{row}_remove")):
            st.session_state[rows_key].remove(row)
            st.rerun()

    medication_rows.append(
        MedicationDraft(name=med_name, usage=usage, dosage=dosage, start_date=start_date, end_date=end_date)
    )

if st.button("+ Add medication"):
    rows = st.session_state[rows_key]
    rows.append(max(rows + [len(initial.medications) - 1]) + 1)
    st.rerun()

# -----------------------------
# Clinical findings
# -----------------------------
st.subheader("Clinical Findings for this Visit" if is_new_visit else "Clinical Findings")

summary = initial.clinical_summary
c1, c2 = st.columns(2)
with c1:
    syndrome = st.text_input("Epilepsy Syndrome", value=summary.syndrome, key=key("syndrome"))
with c2:
    seizure_options = ["", *SEIZURE_TYPES]
    if summary.seizure_type and summary.seizure_type not in seizure_options:
        seizure_options.append(summary.seizure_type)
    seizure_type = st.selectbox(
        "Seizure Type",
        seizure_options,
        index=seizure_options.index(summary.seizure_type),
        key=key("seizure_type"),
    )
eeg = st.text_area("EEG", value=summary.eeg, key=key("eeg"))
mri = st.text_area("MRI", value=summary.mri, key=key("mri"))
c1, c2 = st.columns(2)
with c1:
    genetic = st.text_area("Genetic Testing", value=summary.genetic, key=key("genetic"))
with c2:
    biochemical = st.text_area("Biochemistry", value=summary.biochemical, key=key("biochemical"))
other = st.text_area("Other", value=summary.other, key=key("other"))

# -----------------------------
# Follow-up plan
# -----------------------------
st.subheader("Follow-up Plan")

follow = initial.follow_up
items = st.multiselect(
    "Follow-up items",
    FOLLOW_UP_ITEMS,
    default=[i for i in follow.items if i in FOLLOW_UP_ITEMS],
    key=key("items"),
)
other_text = ""
if OTHER_FOLLOW_UP_ITEM in items:
    other_text = st.text_input("Other follow-up item", value=follow.other_text, key=key("other_text"))

c1, c2, c3 = st.columns(3)
with c1:
    interval_months = st.number_input(
        "Interval (months)", min_value=1, max_value=24, step=1, value=follow.interval_months, key=key("interval")
    )
with c2:
    last_follow_up = st.date_input("Visit date", value=follow.last_follow_up_date, key=key("last_follow_up"))
with c3:
    next_date = add_months(last_follow_up, int(interval_months)) if last_follow_up else None
    st.metric("Next follow-up", next_date.isoformat() if next_date else "—")

st.write("---")

col1, col2 = st.columns(2)
with col1:
    if st.button("Save", type="primary", use_container_width=True):
        draft = PatientDraft(
            name=name,
            gender=gender,
            birthday=birthday,
            allergies=allergies,
            family_history=family_history,
            id_card=id_card,
            phone=phone,
            diagnosis=diagnosis,
            diagnosis_date=diagnosis_date,
            clinical_summary=ClinicalSummary(
                syndrome=syndrome,
                seizure_type=seizure_type,
                eeg=eeg,
                mri=mri,
                genetic=genetic,
                biochemical=biochemical,
                other=other,
            ),
            medications=medication_rows,
            follow_up=FollowUpDraft(
                items=items,
                other_text=other_text,
                interval_months=int(interval_months),
                last_follow_up_date=last_follow_up,
            ),
        )
        try:
            result = reconcile(existing, draft, is_new_visit, store=store)
        except FollowUpError as e:
            st.error(str(e))
        else:
            messages = {
                SaveOutcome.CREATED: "Patient record created.",
                SaveOutcome.PROFILE_UPDATED: "Patient profile updated.",
                SaveOutcome.VISIT_APPENDED: "Visit recorded.",
            }
            st.success(messages[result.outcome])
            clear_form_state()
            st.session_state.pop(rows_key, None)
            st.switch_page("app.py")
with col2:
    if st.button("Cancel", use_container_width=True):
        clear_form_state()
        st.session_state.pop(rows_key, None)
        st.switch_page("app.py")
