"""Patient data models."""

import calendar
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time

from clinic.models.visit_reason import VisitReason

_MDY_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def parse_birth_date(text: str) -> date:
    """Parse a lenient M/D/YYYY date (one or two digit month and day).

    A day past the end of its month (2/30, 4/31) is moved back to the last
    day of that month.

    Raises:
        ValueError: If the text is not M/D/YYYY, the month is not 1-12 or the day not 1-31
    """
    match = _MDY_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Birth date must be M/D/YYYY, got {text!r}")

    month, day, year = (int(part) for part in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ValueError(f"Birth date out of range: {text!r}")

    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def _now_time() -> time:
    return datetime.now().time().replace(microsecond=0)


@dataclass(eq=False)
class PatientRecord:
    """Patient as held in the clinic queues.

    The check-in time is captured once when the record is created and never
    recomputed. Ages are derived from the birth date on every read.
    """

    id: str
    names: str
    birth_date: date
    phone_number: str
    address: str
    reason: VisitReason = VisitReason.GENERAL_CHECK
    check_in_time: time = field(default_factory=_now_time)

    @classmethod
    def from_fields(
        cls,
        id: str,
        names: str,
        birth_date_mdy: str,
        phone_number: str,
        address: str,
        reason_text: str | None,
    ) -> "PatientRecord":
        """Build a record from raw text fields as they appear in a record file."""
        return cls(
            id=id.strip(),
            names=names.strip(),
            birth_date=parse_birth_date(birth_date_mdy),
            phone_number=phone_number.strip(),
            address=address.strip(),
            reason=VisitReason.parse(reason_text),
        )

    def age_on(self, today: date) -> int:
        """Whole years between the birth date and the given day."""
        had_birthday = (today.month, today.day) >= (self.birth_date.month, self.birth_date.day)
        return today.year - self.birth_date.year - (0 if had_birthday else 1)

    @property
    def age_years(self) -> int:
        """Age in whole years as of today."""
        return self.age_on(date.today())

    @property
    def display_phone(self) -> str:
        """Phone number as (xxx) xxx-xxxx when it has exactly ten digits."""
        digits = "".join(filter(str.isdigit, self.phone_number))
        if len(digits) == 10:
            return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
        return self.phone_number

    @property
    def check_in(self) -> str:
        """Check-in time as HH:MM:SS."""
        return self.check_in_time.strftime("%H:%M:%S")

    def display_line(self) -> str:
        """One-line description used when listing a queue."""
        return f"{self.names} | {self.reason.label} | Check-in: {self.check_in} | Age: {self.age_years}"

    def summary(self) -> str:
        """Full description used in search results."""
        return (
            f"Patient [Names: {self.names}, ID: {self.id}, Birthdate: {self.birth_date.isoformat()}, "
            f"Phone: {self.display_phone}, Address: {self.address}, Reason: {self.reason.label}, "
            f"Check-in: {self.check_in}]"
        )

    def __lt__(self, other: "PatientRecord") -> bool:
        # Older patients sort first
        if not isinstance(other, PatientRecord):
            return NotImplemented
        return self.age_years > other.age_years

    def __str__(self) -> str:
        return self.summary()
