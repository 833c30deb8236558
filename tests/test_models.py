"""Tests for data models."""

from datetime import date, time
from decimal import Decimal

import pytest

from clinic.models.patient import PatientRecord, parse_birth_date
from clinic.models.visit_reason import VisitReason
from clinic.models.workflow import PassResult, PatientEntry, ProcessResult, SearchResult, WorkflowErrorKind


def make_patient(**overrides) -> PatientRecord:
    fields = {
        "id": "1",
        "names": "Nehemias",
        "birth_date": date(1968, 9, 28),
        "phone_number": "862-281-4373",
        "address": "Illinois",
        "reason": VisitReason.GENERAL_CHECK,
        "check_in_time": time(9, 30, 0),
    }
    fields.update(overrides)
    return PatientRecord(**fields)


class TestVisitReason:
    """Tests for the visit reason catalog."""

    def test_prices_and_labels(self):
        """Test each reason carries its price and label."""
        assert VisitReason.GENERAL_CHECK.price == Decimal("20.00")
        assert VisitReason.PRESCRIPTION.price == Decimal("30.00")
        assert VisitReason.INTERVENTION.price == Decimal("50.00")
        assert VisitReason.INTERVENTION.label == "Intervention"
        assert str(VisitReason.GENERAL_CHECK) == "General Check"

    def test_parse_is_case_insensitive_and_trimmed(self):
        """Test parsing ignores case and surrounding whitespace."""
        assert VisitReason.parse("  PRESCRIPTION ") is VisitReason.PRESCRIPTION
        assert VisitReason.parse("general check") is VisitReason.GENERAL_CHECK
        assert VisitReason.parse("Intervention\n") is VisitReason.INTERVENTION

    def test_parse_defaults_to_general_check(self):
        """Test unknown or missing text falls back to General Check."""
        for text in ["", "   ", "surgery", None]:
            assert VisitReason.parse(text) is VisitReason.GENERAL_CHECK


class TestPatientRecord:
    """Tests for the patient record."""

    def test_parse_birth_date_lenient(self):
        """Test single and double digit month/day are accepted."""
        assert parse_birth_date("9/28/1968") == date(1968, 9, 28)
        assert parse_birth_date("09/08/1968") == date(1968, 9, 8)
        assert parse_birth_date(" 1/2/2000 ") == date(2000, 1, 2)

    def test_parse_birth_date_invalid(self):
        """Test malformed or impossible dates are rejected."""
        for text in ["1968-09-28", "13/01/2000", "0/5/2000", "1/32/2000", "2/0/2000", "1/1/68", ""]:
            with pytest.raises(ValueError):
                parse_birth_date(text)

    def test_parse_birth_date_clamps_to_month_end(self):
        """Test a day past the end of its month resolves to the last valid day."""
        assert parse_birth_date("2/30/1990") == date(1990, 2, 28)
        assert parse_birth_date("2/31/2000") == date(2000, 2, 29)
        assert parse_birth_date("4/31/1990") == date(1990, 4, 30)

    def test_from_fields(self):
        """Test building a record from raw record-file text."""
        patient = PatientRecord.from_fields(" 7 ", " Ana Ruiz ", "3/4/1990", "5551234567", "Ohio", "prescription")
        assert patient.id == "7"
        assert patient.names == "Ana Ruiz"
        assert patient.birth_date == date(1990, 3, 4)
        assert patient.reason is VisitReason.PRESCRIPTION
        assert patient.check_in_time.microsecond == 0

    def test_check_in_time_is_fixed(self):
        """Test check-in time does not change after creation."""
        patient = PatientRecord.from_fields("1", "Ana", "1/1/1990", "555", "Ohio", "")
        first = patient.check_in
        assert patient.check_in == first
        assert patient.check_in_time is patient.check_in_time

    def test_age_on(self):
        """Test whole-year age around the birthday."""
        patient = make_patient(birth_date=date(1968, 9, 28))
        assert patient.age_on(date(2024, 9, 27)) == 55
        assert patient.age_on(date(2024, 9, 28)) == 56
        assert patient.age_on(date(2025, 1, 1)) == 56

    def test_age_years_uses_today(self):
        """Test derived age is computed against the current date."""
        patient = make_patient()
        assert patient.age_years == patient.age_on(date.today())

    def test_display_phone(self):
        """Test ten-digit numbers are formatted and others left raw."""
        assert make_patient(phone_number="862-281-4373").display_phone == "(862) 281-4373"
        assert make_patient(phone_number="555-1234").display_phone == "555-1234"

    def test_display_line(self):
        """Test queue listing line."""
        patient = make_patient(reason=VisitReason.INTERVENTION)
        line = patient.display_line()
        assert line.startswith("Nehemias | Intervention | Check-in: 09:30:00 | Age: ")

    def test_summary(self):
        """Test search summary contains every field."""
        summary = make_patient().summary()
        assert summary == (
            "Patient [Names: Nehemias, ID: 1, Birthdate: 1968-09-28, Phone: (862) 281-4373, "
            "Address: Illinois, Reason: General Check, Check-in: 09:30:00]"
        )

    def test_older_patients_sort_first(self):
        """Test age comparison orders older patients first."""
        young = make_patient(id="y", birth_date=date(2000, 1, 1))
        old = make_patient(id="o", birth_date=date(1950, 1, 1))
        assert old < young
        assert [p.id for p in sorted([young, old])] == ["o", "y"]

    def test_records_with_same_fields_are_distinct(self):
        """Test duplicate records are not collapsed by equality."""
        assert make_patient() != make_patient()


class TestWorkflowModels:
    """Tests for workflow result models."""

    def test_patient_entry_from_record(self):
        """Test snapshot of a record for results."""
        entry = PatientEntry.from_record(make_patient(reason=VisitReason.PRESCRIPTION))
        assert entry.id == "1"
        assert entry.reason == "Prescription"
        assert entry.check_in == "09:30:00"

    def test_pass_result_shortfall(self):
        """Test shortfall is reported only for successful partial moves."""
        assert PassResult(requested=3, moved=1).shortfall is True
        assert PassResult(requested=1, moved=1).shortfall is False
        assert PassResult(requested=0, error=WorkflowErrorKind.INVALID_ARGUMENT).shortfall is False

    def test_process_result_serializes_shortfall(self):
        """Test computed fields appear in the serialized result."""
        data = ProcessResult(requested=5, processed=2).model_dump()
        assert data["shortfall"] is True
        assert data["error"] is None

    def test_search_result_found(self):
        """Test found reflects whether any match exists."""
        assert SearchResult(patient_id="9", include_attention=True).found is False
