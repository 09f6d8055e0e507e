"""
Unit Tests for the JSON record store
"""

import json
import os

import pytest

from grading.core.entities import StudentRecord
from grading.core.exceptions import PersistenceError
from grading.persistence import InMemoryRecordStore, JsonRecordStore, records_from_document


@pytest.fixture
def sample_records(passing_marks, failing_marks):
    jane = StudentRecord("23456789", "Jane Doe")
    jane.add_marks(passing_marks)
    jane.add_marks(failing_marks)
    amara = StudentRecord("12345678", "Amara Okafor")
    return [jane, amara]


class TestJsonRecordStore:
    """Tests for reading and writing the data file."""

    def test_load_when_file_missing_then_returns_empty(self, json_store):
        assert json_store.load() == []

    def test_save_when_called_then_writes_camel_case_document(self, json_store, data_file, sample_records):
        json_store.save(sample_records)

        document = json.loads(data_file.read_text(encoding="utf-8"))

        assert set(document) == {"students", "lastUpdated"}
        assert [s["studentNumber"] for s in document["students"]] == ["12345678", "23456789"]
        entry = document["students"][1]["marksHistory"][0]
        assert set(entry) == {"subjectMarks", "timestamp", "averageMark", "passStatus"}
        assert entry["passStatus"] == "PASS"

    def test_roundtrip_when_saved_then_reload_preserves_records(self, json_store, sample_records):
        json_store.save(sample_records)

        restored = {r.student_number: r for r in json_store.load()}

        assert set(restored) == {"12345678", "23456789"}
        for original in sample_records:
            copy = restored[original.student_number]
            assert copy.student_name == original.student_name
            assert copy.created_at == original.created_at
            assert copy.last_modified == original.last_modified
            assert copy.marks_history == original.marks_history

    def test_save_when_called_then_leaves_no_temporary_files(self, json_store, data_file, sample_records):
        json_store.save(sample_records)
        json_store.save(sample_records)

        assert os.listdir(data_file.parent) == ["students.json"]

    def test_save_when_replace_fails_then_previous_file_intact(self, json_store, data_file, sample_records, monkeypatch):
        json_store.save(sample_records[:1])
        before = data_file.read_text(encoding="utf-8")

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(PersistenceError):
            json_store.save(sample_records)

        assert data_file.read_text(encoding="utf-8") == before
        assert os.listdir(data_file.parent) == ["students.json"]

    def test_load_when_invalid_json_then_raises_persistence_error(self, json_store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError):
            json_store.load()

    def test_load_when_layout_wrong_then_raises_persistence_error(self, json_store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text(json.dumps({"students": [{"studentName": "No Number"}]}), encoding="utf-8")

        with pytest.raises(PersistenceError):
            json_store.load()


class TestRecordsFromDocument:
    """Tests for rebuilding records from a parsed document."""

    def _document(self, number="12345678", marks=None):
        return {
            "students": [{
                "studentNumber": number,
                "studentName": "Jane Doe",
                "marksHistory": [] if marks is None else [{
                    "subjectMarks": marks,
                    "timestamp": "2024-05-01T09:30:00+00:00",
                    "averageMark": 1.0,
                    "passStatus": "FAIL",
                }],
                "createdAt": "2024-05-01T09:00:00+00:00",
                "lastModified": "2024-05-01T09:30:00+00:00",
            }],
            "lastUpdated": "2024-05-01T09:30:00+00:00",
        }

    def test_load_when_stored_derived_values_stale_then_recomputed(self, passing_marks):
        records = records_from_document(self._document(marks=passing_marks))

        entry = records[0].latest_marks
        assert round(entry.average_mark, 2) == 86.67
        assert entry.pass_status.value == "PASS"

    def test_load_when_mark_out_of_range_then_raises(self, passing_marks):
        passing_marks["CS101"] = 120

        with pytest.raises(PersistenceError):
            records_from_document(self._document(marks=passing_marks))

    def test_load_when_number_malformed_then_raises(self):
        with pytest.raises(PersistenceError):
            records_from_document(self._document(number="1234"))

    def test_load_when_duplicate_numbers_then_raises(self):
        document = self._document()
        document["students"].append(dict(document["students"][0]))

        with pytest.raises(PersistenceError):
            records_from_document(document)


class TestInMemoryRecordStore:
    """Tests for the in-memory store."""

    def test_save_then_load_when_called_then_roundtrips(self, sample_records):
        store = InMemoryRecordStore()

        store.save(sample_records)

        assert store.save_count == 1
        assert sorted(r.student_number for r in store.load()) == ["12345678", "23456789"]
