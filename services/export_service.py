import csv
import io
from datetime import date
from typing import Iterable

from models.patient import Patient
from services.storage_service import dump_patients

CSV_HEADERS = [
    "Name",
    "Gender",
    "Birthday",
    "Age",
    "Allergies",
    "Family History",
    "Phone",
    "ID Card",
    "Diagnosis",
    "Medications",
]

# Spreadsheet tools need the BOM to detect UTF-8
BOM = "\ufeff"


def _csv_row(p: Patient) -> list[str]:
    return [
        p.name,
        p.gender.label,
        p.birthday.isoformat(),
        str(p.age),
        p.allergies,
        p.family_history,
        p.phone,
        # Leading quote keeps spreadsheets from turning long ids into numbers
        f"'{p.id_card}",
        p.diagnosis,
        "; ".join(m.display() for m in p.medications),
    ]


def export_csv(patients: Iterable[Patient]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for p in patients:
        writer.writerow(_csv_row(p))
    return BOM + buffer.getvalue()


def export_json(patients: Iterable[Patient]) -> str:
    """Full human-readable backup, re-importable via import_backup."""
    return dump_patients(patients, indent=2)


def csv_export_filename(today: date) -> str:
    return f"Epilepsy_Patients_Export_{today.isoformat()}.csv"


def backup_filename(today: date) -> str:
    return f"Epilepsy_Full_Backup_{today.isoformat()}.json"
