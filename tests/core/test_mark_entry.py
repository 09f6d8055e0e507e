"""
Unit Tests for MarkEntry

Covers validation of mark sets, the derived average and the per-subject
pass rule.
"""

from datetime import datetime, timezone

import pytest

from grading.core.entities import MarkEntry
from grading.core.enums import PassStatus
from grading.core.exceptions import ValidationError


class TestMarkEntryValidation:
    """Tests for mark set validation on construction."""

    def test_create_when_complete_then_stores_marks_in_catalog_order(self, passing_marks):
        shuffled = dict(reversed(list(passing_marks.items())))

        entry = MarkEntry(shuffled)

        assert list(entry.subject_marks) == ["CS101", "CS102", "CS103", "CS104", "CS105", "CS106"]
        assert entry.marks == (85, 92, 78, 88, 90, 87)

    def test_create_when_none_then_raises(self):
        with pytest.raises(ValidationError):
            MarkEntry(None)

    def test_create_when_not_mapping_then_raises(self):
        with pytest.raises(ValidationError):
            MarkEntry([85, 92, 78, 88, 90, 87])

    def test_create_when_five_marks_then_raises(self, passing_marks):
        del passing_marks["CS106"]

        with pytest.raises(ValidationError) as exc_info:
            MarkEntry(passing_marks)

        assert exc_info.value.error_code == "wrong_mark_count"

    def test_create_when_seven_marks_then_raises(self, passing_marks):
        passing_marks["CS107"] = 50

        with pytest.raises(ValidationError):
            MarkEntry(passing_marks)

    @pytest.mark.parametrize("mark", [-1, 101, 1000])
    def test_create_when_mark_out_of_range_then_raises(self, passing_marks, mark):
        passing_marks["CS104"] = mark

        with pytest.raises(ValidationError) as exc_info:
            MarkEntry(passing_marks)

        assert exc_info.value.error_code == "mark_out_of_range"

    @pytest.mark.parametrize("mark", [0, 100])
    def test_create_when_mark_on_boundary_then_accepts(self, passing_marks, mark):
        passing_marks["CS104"] = mark

        assert MarkEntry(passing_marks).mark_for("CS104") == mark

    @pytest.mark.parametrize("mark", [85.5, "85", True, None])
    def test_create_when_mark_not_integer_then_raises(self, passing_marks, mark):
        passing_marks["CS102"] = mark

        with pytest.raises(ValidationError):
            MarkEntry(passing_marks)

    def test_create_when_unknown_code_replaces_known_then_raises(self, passing_marks):
        del passing_marks["CS105"]
        passing_marks["MATH101"] = 70

        with pytest.raises(ValidationError) as exc_info:
            MarkEntry(passing_marks)

        assert exc_info.value.error_code == "unknown_subject"

    def test_create_when_duplicate_code_in_other_case_then_raises_missing(self, passing_marks):
        del passing_marks["CS105"]
        passing_marks["cs101"] = 70

        with pytest.raises(ValidationError) as exc_info:
            MarkEntry(passing_marks)

        assert exc_info.value.error_code == "missing_subject"
        assert exc_info.value.details["subject"] == "CS105"

    def test_create_when_lowercase_codes_then_accepts(self, passing_marks):
        lowered = {code.lower(): mark for code, mark in passing_marks.items()}

        assert MarkEntry(lowered).subject_marks == passing_marks

    def test_create_when_code_padded_with_spaces_then_raises_unknown(self, passing_marks):
        marks = dict(passing_marks)
        marks[" CS101 "] = marks.pop("CS101")

        with pytest.raises(ValidationError) as exc_info:
            MarkEntry(marks)

        assert exc_info.value.error_code == "unknown_subject"


class TestMarkEntryDerivedValues:
    """Tests for average and pass status."""

    def test_average_when_jane_doe_marks_then_rounds_to_86_67(self, passing_marks):
        entry = MarkEntry(passing_marks)

        assert entry.average_mark == pytest.approx(520 / 6)
        assert round(entry.average_mark, 2) == 86.67

    def test_pass_status_when_all_at_threshold_then_pass(self):
        entry = MarkEntry({code: 40 for code in ("CS101", "CS102", "CS103", "CS104", "CS105", "CS106")})

        assert entry.pass_status is PassStatus.PASS

    def test_pass_status_when_one_mark_below_threshold_then_fail(self, passing_marks):
        passing_marks["CS106"] = 39

        entry = MarkEntry(passing_marks)

        assert entry.pass_status is PassStatus.FAIL
        assert [s.code for s in entry.failed_subjects] == ["CS106"]

    def test_pass_status_when_high_average_but_one_subject_failed_then_fail(self):
        marks = {"CS101": 100, "CS102": 100, "CS103": 100, "CS104": 100, "CS105": 100, "CS106": 0}

        entry = MarkEntry(marks)

        assert entry.average_mark > 80
        assert entry.pass_status is PassStatus.FAIL

    def test_timestamp_when_given_then_kept(self, passing_marks):
        stamp = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

        assert MarkEntry(passing_marks, timestamp=stamp).timestamp == stamp

    def test_subject_marks_when_mutated_then_entry_unchanged(self, passing_marks):
        entry = MarkEntry(passing_marks)

        exposed = entry.subject_marks
        exposed["CS101"] = 0
        passing_marks["CS101"] = 0

        assert entry.mark_for("CS101") == 85

    def test_to_dict_when_called_then_uses_camel_case_keys(self, passing_marks):
        data = MarkEntry(passing_marks).to_dict()

        assert set(data) == {"subjectMarks", "timestamp", "averageMark", "passStatus"}
        assert data["passStatus"] == "PASS"
