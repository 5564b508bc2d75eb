"""
Tests for ExtractedRecord serialization and defaulting.
"""

import pytest

from jobsift.contexts.intake.exceptions import CircuitOpenError, ExtractionError
from jobsift.contexts.intake.job_record import (
    DEFAULT_COMPANY,
    DEFAULT_SKILL,
    DEFAULT_TITLE,
    NOT_SPECIFIED,
    ExtractedRecord,
    RawPosting,
    apply_defaults,
)


@pytest.mark.unit
def test_to_dict_uses_wire_names():
    record = ExtractedRecord(
        title="Engineer",
        company="Acme",
        skills=("Python",),
        experience_level="Senior",
        location="Remote",
        salary_range="$90k",
        summary="Summary",
    )
    assert record.to_dict() == {
        "title": "Engineer",
        "company": "Acme",
        "skills": ["Python"],
        "experienceLevel": "Senior",
        "location": "Remote",
        "salaryRange": "$90k",
        "descriptionSummary": "Summary",
    }


@pytest.mark.unit
def test_from_dict_reverses_to_dict():
    record = ExtractedRecord(title="Engineer", company="Acme", skills=("Go", "SQL"), summary="S")
    assert ExtractedRecord.from_dict(record.to_dict()) == record


@pytest.mark.unit
def test_from_dict_accepts_snake_case_and_ignores_unknown():
    record = ExtractedRecord.from_dict(
        {"Salary_Range": " $1 ", "experience_level": "Senior", "extra": "ignored", "title": None}
    )
    assert record.salary_range == "$1"
    assert record.experience_level == "Senior"
    assert record.title == DEFAULT_TITLE


@pytest.mark.unit
def test_apply_defaults_fills_blanks_and_invalid_enums():
    record = ExtractedRecord(
        title="  ",
        company="",
        skills=("", "  "),
        experience_level="Guru",
        location="Mars",
        salary_range=" ",
    )
    result = apply_defaults(record)

    assert result.title == DEFAULT_TITLE
    assert result.company == DEFAULT_COMPANY
    assert result.skills == (DEFAULT_SKILL,)
    assert result.experience_level == NOT_SPECIFIED
    assert result.location == NOT_SPECIFIED
    assert result.salary_range == NOT_SPECIFIED


@pytest.mark.unit
def test_apply_defaults_dedupes_skills_in_order():
    record = ExtractedRecord(skills=("Python", "python", "SQL", "Python "))
    assert apply_defaults(record).skills == ("Python", "SQL")


@pytest.mark.unit
def test_records_are_immutable():
    record = ExtractedRecord()
    with pytest.raises(AttributeError):
        record.title = "Changed"


@pytest.mark.unit
def test_raw_posting_fingerprint():
    posting = RawPosting.from_text("Senior Developer wanted")
    assert posting.fingerprint == RawPosting.from_text("Senior Developer wanted").fingerprint
    assert len(posting.fingerprint) == 64


@pytest.mark.unit
def test_error_message_includes_detail_and_truncated_snippet():
    error = ExtractionError("Bad reply", detail="HTTP 500", snippet="x" * 500)
    message = str(error)

    assert message.startswith("Bad reply\nDetail: HTTP 500")
    assert "x" * 200 + "..." in message
    assert "x" * 201 not in message


@pytest.mark.unit
def test_circuit_open_error_fields():
    error = CircuitOpenError("remote", 12.34)
    assert error.breaker_name == "remote"
    assert "retry in 12.3s" in str(error)
