"""Clinic services: queues, ledger, record loading and the workflow engine."""

from clinic.services.ledger import ReceiptLedger
from clinic.services.queue import LinkedQueue
from clinic.services.workflow import WorkflowEngine

__all__ = ["LinkedQueue", "ReceiptLedger", "WorkflowEngine"]
