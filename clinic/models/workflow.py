"""Workflow command and result models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from clinic.models.patient import PatientRecord


class QueueName(str, Enum):
    """The two lines a patient can be in."""

    WAITING = "waiting"
    ATTENTION = "attention"

    @property
    def display_name(self) -> str:
        return "Waiting Room" if self is QueueName.WAITING else "Being Attended"


class WorkflowErrorKind(str, Enum):
    """Recoverable failures reported in a workflow result."""

    INVALID_ARGUMENT = "invalid_argument"
    ATTENTION_EMPTY = "attention_empty"
    LEDGER_WRITE_FAILED = "ledger_write_failed"


class PatientEntry(BaseModel):
    """Patient as shown in queue listings and command results."""

    id: str
    names: str
    reason: str
    check_in: str
    age: int

    @classmethod
    def from_record(cls, record: PatientRecord) -> "PatientEntry":
        """Snapshot a queued record."""
        return cls(
            id=record.id,
            names=record.names,
            reason=record.reason.label,
            check_in=record.check_in,
            age=record.age_years,
        )


class QueueView(BaseModel):
    """Ordered contents of one queue."""

    queue: QueueName
    size: int
    patients: list[PatientEntry]
    lines: list[str] = Field(default_factory=list)


class WorkflowResult(BaseModel):
    """Fields shared by the batch command results."""

    requested: int
    error: WorkflowErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


class PassRequest(BaseModel):
    """Request to move patients from waiting to attention."""

    count: int = Field(..., description="How many patients to pass to attention")


class PassResult(WorkflowResult):
    """Outcome of passing patients to attention."""

    moved: int = 0
    patients: list[PatientEntry] = Field(default_factory=list)

    @computed_field
    @property
    def shortfall(self) -> bool:
        return self.ok and self.moved < self.requested


class SearchMatch(BaseModel):
    """A patient whose ID matched a search."""

    queue: QueueName
    patient: PatientEntry
    summary: str


class SearchResult(BaseModel):
    """Every match for an ID across the scanned queues."""

    patient_id: str
    include_attention: bool
    matches: list[SearchMatch] = Field(default_factory=list)

    @computed_field
    @property
    def found(self) -> bool:
        return bool(self.matches)


class ProcessRequest(BaseModel):
    """Request to bill and remove patients from attention."""

    count: int = Field(..., description="How many patients to process")


class ReceiptLine(BaseModel):
    """One billed visit."""

    names: str
    patient_id: str
    reason: str
    price: Decimal


class ProcessResult(WorkflowResult):
    """Outcome of processing patients into a receipt session."""

    processed: int = 0
    items: list[ReceiptLine] = Field(default_factory=list)
    total: Decimal = Decimal("0.00")
    session_id: str | None = None
    ledger_path: str | None = None
    written_at: datetime | None = None

    @computed_field
    @property
    def shortfall(self) -> bool:
        return self.ok and self.processed < self.requested


class LoadRequest(BaseModel):
    """Request to load a record file into the waiting queue."""

    path: str | None = Field(None, description="Record file, defaults to the configured patient file")


class LoadResult(BaseModel):
    """Outcome of loading a record file."""

    path: str
    loaded: int
    skipped_lines: list[int]
    waiting: int


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: datetime
    version: str
    waiting: int
    attention: int
