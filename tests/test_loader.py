"""Tests for patient record file loading."""

from datetime import date

import pytest

from clinic.errors import MalformedRecordError, RecordFileError
from clinic.models.visit_reason import VisitReason
from clinic.services.loader import load_records, parse_record_line


class TestParseRecordLine:
    """Tests for single record lines."""

    def test_valid_line(self):
        """Test a well-formed record line."""
        patient = parse_record_line("1,Nehemias,09/28/1968,862-281-4373,Illinois,General Check")
        assert patient.id == "1"
        assert patient.names == "Nehemias"
        assert patient.birth_date == date(1968, 9, 28)
        assert patient.address == "Illinois"
        assert patient.reason is VisitReason.GENERAL_CHECK

    def test_unknown_reason_defaults(self):
        """Test an unknown reason falls back to General Check."""
        assert parse_record_line("2,Ana,1/2/1990,555,Ohio,Dental").reason is VisitReason.GENERAL_CHECK

    def test_too_few_fields(self):
        """Test lines missing fields are rejected."""
        with pytest.raises(MalformedRecordError, match="Expected 6 fields"):
            parse_record_line("1,Nehemias,09/28/1968")

    def test_bad_date(self):
        """Test lines with an unparseable birth date are rejected."""
        with pytest.raises(MalformedRecordError):
            parse_record_line("1,Nehemias,1968-09-28,862-281-4373,Illinois,General Check")


class TestLoadRecords:
    """Tests for whole record files."""

    def test_skips_blank_and_malformed_lines(self, tmp_path):
        """Test only well-formed records are returned, in file order."""
        record_file = tmp_path / "Patient.txt"
        record_file.write_text(
            "1,Ana,1/2/1990,555-111-2222,Ohio,Prescription\n"
            "\n"
            "broken line\n"
            "2,Ben,13/40/1990,555,Ohio,Intervention\n"
            "3,Cid,12/31/1975,555-333-4444,Texas,intervention\n",
            encoding="utf-8",
        )

        report = load_records(record_file)

        assert [p.id for p in report.records] == ["1", "3"]
        assert report.skipped == [3, 4]
        assert report.records[1].reason is VisitReason.INTERVENTION

    def test_missing_file(self, tmp_path):
        """Test a missing record file is reported to the caller."""
        with pytest.raises(FileNotFoundError):
            load_records(tmp_path / "nope.txt")

    def test_undecodable_file(self, tmp_path):
        """Test a file that is not UTF-8 is reported as a record file error."""
        record_file = tmp_path / "Patient.txt"
        record_file.write_bytes(b"1,Ana,1/2/1990,555,Ohio,Prescription\n2,\xff\xfeBen,1/2/1990,555,Ohio,Intervention\n")

        with pytest.raises(RecordFileError) as exc_info:
            load_records(record_file)
        assert exc_info.value.path == str(record_file)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_directory_path(self, tmp_path):
        """Test a directory given as the record file is reported as a record file error."""
        with pytest.raises(RecordFileError, match="Could not read record file"):
            load_records(tmp_path)
