"""Patient record file loading."""

from dataclasses import dataclass, field
from pathlib import Path

from clinic.errors import MalformedRecordError, RecordFileError
from clinic.models.patient import PatientRecord
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

RECORD_FORMAT = "id,name,MM/dd/yyyy,phone,address,reason"
RECORD_EXAMPLE = "1,Nehemias,09/28/1968,862-281-4373,Illinois,General Check"
FIELD_COUNT = 6


@dataclass
class LoadReport:
    """Outcome of loading a record file."""

    records: list[PatientRecord] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)


def parse_record_line(line: str) -> PatientRecord:
    """Parse one `id,name,M/D/YYYY,phone,address,reason` line.

    Raises:
        MalformedRecordError: If the line has too few fields or a bad birth date
    """
    values = line.split(",")
    if len(values) < FIELD_COUNT:
        raise MalformedRecordError(f"Expected {FIELD_COUNT} fields, got {len(values)}")

    try:
        return PatientRecord.from_fields(*values[:FIELD_COUNT])
    except ValueError as e:
        raise MalformedRecordError(str(e)) from e


def load_records(path: str | Path) -> LoadReport:
    """Read every well-formed patient record from a file.

    Blank lines are ignored; malformed lines are logged and skipped.

    Raises:
        FileNotFoundError: If the record file does not exist
        RecordFileError: If the file cannot be opened or decoded
    """
    path = Path(path)
    if not path.exists():
        logger.error(f"Data file not found: {path.absolute()} (expected lines like: {RECORD_FORMAT}, e.g. {RECORD_EXAMPLE})")
        raise FileNotFoundError(f"Data file not found: {path}")

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error loading patients from {path}: {e}")
        raise RecordFileError(str(path), str(e)) from e

    report = LoadReport()
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        try:
            report.records.append(parse_record_line(line))
        except MalformedRecordError as e:
            logger.warning(f"Skipping line {line_no}: {e}")
            report.skipped.append(line_no)

    logger.info(f"Loaded {len(report.records)} patient(s) from {path}, skipped {len(report.skipped)}")
    return report
