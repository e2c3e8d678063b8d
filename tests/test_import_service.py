"""Tests for import parsing and identity-based merge."""

import json

import pytest

from core.errors import ImportFormatError
from models.patient import Gender
from services.export_service import export_json
from services.import_service import import_backup, import_merge, parse_import_payload


class TestImportMerge:
    def test_adds_only_unknown_identities(self, make_patient):
        original = make_patient(id_card="A1", name="Original")
        incoming = [make_patient(id_card="A1", name="Updated copy"), make_patient(id_card="B2")]

        merged, added = import_merge([original], incoming)

        assert added == 1
        assert [p.id_card for p in merged] == ["A1", "B2"]
        assert merged[0] is original

    def test_idempotent_on_reimport(self, make_patient):
        incoming = [make_patient(id_card="A1"), make_patient(id_card="B2"), make_patient()]
        merged, first = import_merge([], incoming)
        merged_again, second = import_merge(merged, incoming)
        assert first == 3
        assert second == 0
        assert merged_again == merged

    def test_falls_back_to_id_without_id_card(self, make_patient):
        existing = make_patient(id="p-1", id_card="")
        merged, added = import_merge([existing], [make_patient(id="p-1", id_card=""), make_patient(id="p-2")])
        assert added == 1
        assert [p.id for p in merged] == ["p-1", "p-2"]

    def test_same_id_with_different_id_card_is_a_new_identity(self, make_patient):
        merged, added = import_merge([make_patient(id="same", id_card="A1")], [make_patient(id="same", id_card="B2")])
        assert added == 1
        assert [(p.id, p.id_card) for p in merged] == [("same", "A1"), ("same", "B2")]

    def test_duplicates_within_incoming_batch(self, make_patient):
        merged, added = import_merge([], [make_patient(id_card="C3", name="First"), make_patient(id_card="C3", name="Second")])
        assert added == 1
        assert [p.name for p in merged] == ["First"]

    def test_inputs_not_mutated(self, make_patient):
        existing = [make_patient(id_card="A1")]
        incoming = [make_patient(id_card="B2")]
        import_merge(existing, incoming)
        assert len(existing) == 1
        assert len(incoming) == 1


class TestParseImportPayload:
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"id": "x"}',
            '[{"id": "x"}]',
            "[1, 2, 3]",
        ],
    )
    def test_malformed_payload_rejected(self, raw):
        with pytest.raises(ImportFormatError):
            parse_import_payload(raw)

    def test_accepts_bytes_with_bom(self, make_patient):
        raw = ("\ufeff" + export_json([make_patient(id_card="A1")])).encode("utf-8")
        [p] = parse_import_payload(raw)
        assert p.id_card == "A1"

    def test_legacy_backup_shape(self):
        legacy = [
            {
                "id": "3f1c",
                "name": "王小明",
                "gender": "男",
                "birthday": "2017-09-01",
                "age": 99,
                "allergies": "",
                "familyHistory": "",
                "idCard": "",
                "phone": "",
                "clinicalSummary": {
                    "syndrome": "", "seizureType": "", "eeg": "", "mri": "",
                    "genetic": "", "biochemical": "", "other": "",
                },
                "diagnosis": "癫痫",
                "diagnosisDate": "",
                "medications": [
                    {"name": "丙戊酸钠 (Valproate)", "usage": "bid", "dosage": "0.25g",
                     "startDate": "2024-01-01", "endDate": ""},
                    {"name": "左乙拉西坦 (Levetiracetam)", "usage": "bid", "dosage": "0.25g",
                     "startDate": "", "endDate": ""},
                ],
                "followUpConfig": {
                    "items": ["脑电图 (EEG)"], "intervalMonths": "3",
                    "lastFollowUpDate": "2024-01-31", "nextFollowUpDate": "2024-05-01",
                },
                "visitHistory": [],
                "createdAt": 1704067200000,
            }
        ]
        [p] = parse_import_payload(json.dumps(legacy, ensure_ascii=False))
        assert p.gender is Gender.MALE
        assert p.diagnosis_date is None
        assert p.medications[0].is_active
        assert p.medications[1].start_date is None
        assert p.follow_up_config.next_follow_up_date.isoformat() == "2024-04-30"
        assert p.assessment_history == []


class TestImportBackup:
    def test_merges_into_store(self, store, make_patient):
        store.add(make_patient(id_card="A1"))
        raw = export_json([make_patient(id_card="A1"), make_patient(id_card="B2")])

        assert import_backup(store, raw) == 1
        assert [p.id_card for p in store.get_all()] == ["A1", "B2"]

    def test_parse_failure_leaves_store_untouched(self, store, backend, make_patient):
        store.add(make_patient(id_card="A1"))
        before = backend.data.copy()
        writes = backend.writes

        with pytest.raises(ImportFormatError):
            import_backup(store, '[{"name": "missing everything"}]')

        assert backend.data == before
        assert backend.writes == writes

    def test_second_import_adds_nothing(self, store, make_patient):
        raw = export_json([make_patient(id_card="A1"), make_patient(id_card="B2")])
        assert import_backup(store, raw) == 2
        assert import_backup(store, raw) == 0
        assert len(store.get_all()) == 2
