"""
Unit Tests for the Subject Catalog
"""

import pytest

from grading.core.subjects import SUBJECTS, Subject, get_by_code, subject_codes, subject_index


class TestCatalog:
    """Tests for the fixed subject list."""

    def test_catalog_when_loaded_then_has_six_subjects(self):
        assert len(SUBJECTS) == 6

    def test_catalog_when_loaded_then_codes_unique_and_ordered(self):
        assert subject_codes() == ("CS101", "CS102", "CS103", "CS104", "CS105", "CS106")

    def test_catalog_when_loaded_then_thresholds_within_range(self):
        for subject in SUBJECTS:
            assert 0 <= subject.passing_mark <= 100
            assert subject.credit_hours > 0

    def test_subject_when_assigned_then_raises(self):
        with pytest.raises(AttributeError):
            SUBJECTS[0].passing_mark = 10

    def test_str_when_called_then_shows_code_name_and_credits(self):
        assert str(SUBJECTS[0]) == "CS101 - Programming Fundamentals (4 credits)"


class TestLookup:
    """Tests for get_by_code."""

    @pytest.mark.parametrize("code", ["CS103", "cs103", "Cs103"])
    def test_get_by_code_when_any_case_then_returns_subject(self, code):
        subject = get_by_code(code)

        assert isinstance(subject, Subject)
        assert subject.name == "Data Structures"

    @pytest.mark.parametrize("code", ["CS999", "", None, 101, " CS103", "CS103 "])
    def test_get_by_code_when_unknown_then_returns_none(self, code):
        assert get_by_code(code) is None

    def test_subject_index_when_known_then_returns_catalog_position(self):
        assert subject_index("cs106") == 5
        assert subject_index("MATH101") is None
