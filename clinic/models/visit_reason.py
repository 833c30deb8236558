"""Visit reason catalog."""

from decimal import Decimal
from enum import Enum


class VisitReason(Enum):
    """Kinds of visit the clinic bills for, each with a fixed price and label."""

    GENERAL_CHECK = (Decimal("20.00"), "General Check")
    PRESCRIPTION = (Decimal("30.00"), "Prescription")
    INTERVENTION = (Decimal("50.00"), "Intervention")

    def __init__(self, price: Decimal, label: str):
        self.price = price
        self.label = label

    @classmethod
    def parse(cls, text: str | None) -> "VisitReason":
        """Parse free text into a visit reason.

        Matching is case-insensitive and ignores surrounding whitespace.
        Unknown or missing text falls back to GENERAL_CHECK.
        """
        normalized = (text or "").strip().lower()
        for reason in cls:
            if reason.label.lower() == normalized:
                return reason
        return cls.GENERAL_CHECK

    def __str__(self) -> str:
        return self.label
