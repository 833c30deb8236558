"""Shared fixtures for clinic tests."""

from datetime import date, time

import pytest

from clinic.models.patient import PatientRecord
from clinic.models.visit_reason import VisitReason
from clinic.services.ledger import ReceiptLedger
from clinic.services.workflow import WorkflowEngine


@pytest.fixture
def make_patient():
    """Factory for patient records with fixed check-in times."""

    def _make(patient_id: str = "1", names: str | None = None, reason: VisitReason = VisitReason.GENERAL_CHECK):
        return PatientRecord(
            id=patient_id,
            names=names or f"Patient {patient_id}",
            birth_date=date(1980, 1, 1),
            phone_number="555-123-4567",
            address="Main St",
            reason=reason,
            check_in_time=time(8, 0, 0),
        )

    return _make


@pytest.fixture
def ledger(tmp_path) -> ReceiptLedger:
    """Ledger writing to a temporary receipts file."""
    return ReceiptLedger(tmp_path / "receipts.txt")


@pytest.fixture
def engine(ledger) -> WorkflowEngine:
    """Workflow engine with empty queues."""
    return WorkflowEngine(ledger=ledger)
