"""Clinic workflow engine: waiting and attention queues plus receipt billing."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from itertools import islice

from cuid2 import cuid_wrapper

from clinic.errors import LedgerWriteError, QueueUnderflow
from clinic.models.patient import PatientRecord
from clinic.models.workflow import (
    PassResult,
    PatientEntry,
    ProcessResult,
    QueueName,
    QueueView,
    ReceiptLine,
    SearchMatch,
    SearchResult,
    WorkflowErrorKind,
)
from clinic.services.ledger import LedgerLineItem, ReceiptLedger
from clinic.services.queue import LinkedQueue
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

cuid = cuid_wrapper()

NON_POSITIVE_COUNT = "Number must be positive."


class WorkflowEngine:
    """Moves patients from the waiting line to attention and bills them out.

    Records only move forward: waiting -> attention via pass_patients, and
    attention -> processed via process_patients. Viewing and searching never
    change either queue.
    """

    def __init__(
        self,
        ledger: ReceiptLedger,
        waiting: LinkedQueue[PatientRecord] | None = None,
        attention: LinkedQueue[PatientRecord] | None = None,
    ):
        """Initialize workflow engine.

        Args:
            ledger: Receipt ledger processed sessions are appended to
            waiting: Optional pre-filled waiting queue
            attention: Optional pre-filled attention queue
        """
        self.ledger = ledger
        self.waiting: LinkedQueue[PatientRecord] = waiting if waiting is not None else LinkedQueue()
        self.attention: LinkedQueue[PatientRecord] = attention if attention is not None else LinkedQueue()

    def queue(self, which: QueueName) -> LinkedQueue[PatientRecord]:
        """Return the queue with the given name."""
        return self.waiting if which is QueueName.WAITING else self.attention

    def admit(self, record: PatientRecord) -> None:
        """Put a newly checked-in patient at the back of the waiting line."""
        self.waiting.enqueue(record)

    def load(self, records: Iterable[PatientRecord]) -> int:
        """Admit records in order; returns how many were admitted."""
        admitted = 0
        for record in records:
            self.admit(record)
            admitted += 1
        logger.info(f"Admitted {admitted} patient(s), waiting now {self.waiting.size()}")
        return admitted

    def counts(self) -> dict[str, int]:
        """Current size of each queue."""
        return {QueueName.WAITING.value: self.waiting.size(), QueueName.ATTENTION.value: self.attention.size()}

    def view_queue(self, which: QueueName) -> QueueView:
        """List a queue front to rear without changing it.

        Raises:
            QueueUnderflow: If the scan and the queue size disagree
        """
        queue = self.queue(which)
        try:
            records = list(queue)
        except QueueUnderflow as e:
            logger.error(f"Invariant violation while viewing {which.value} queue: {e}")
            raise

        logger.info(f"Viewing {which.display_name} ({queue.size()})")
        return QueueView(
            queue=which,
            size=queue.size(),
            patients=[PatientEntry.from_record(record) for record in records],
            lines=[record.display_line() for record in records],
        )

    def pass_patients(self, n: int) -> PassResult:
        """Move up to n patients, in order, from waiting to the back of attention.

        Moving fewer than requested because waiting ran out is a normal result.
        """
        if n <= 0:
            logger.warning(f"Rejected pass of {n} patient(s)")
            return PassResult(requested=n, error=WorkflowErrorKind.INVALID_ARGUMENT, message=NON_POSITIVE_COUNT)

        moved: list[PatientEntry] = []
        while len(moved) < n and not self.waiting.is_empty():
            record = self.waiting.dequeue()
            self.attention.enqueue(record)
            logger.info(f"Passing: {record.names} | {record.reason.label} | Check-in: {record.check_in}")
            moved.append(PatientEntry.from_record(record))

        message = f"Moved {len(moved)} patient(s) to attention."
        if len(moved) < n:
            message += f" Only {len(moved)} patient(s) available to pass."
            logger.info(f"Pass shortfall: requested {n}, moved {len(moved)}")

        return PassResult(requested=n, moved=len(moved), patients=moved, message=message)

    def search_by_id(self, patient_id: str, include_attention: bool = True) -> SearchResult:
        """Report every patient with the given ID, in waiting and optionally attention."""
        scanned = [QueueName.WAITING]
        if include_attention:
            scanned.append(QueueName.ATTENTION)

        matches: list[SearchMatch] = []
        for which in scanned:
            try:
                records = list(self.queue(which))
            except QueueUnderflow as e:
                logger.error(f"Invariant violation while searching {which.value} queue: {e}")
                raise

            matches.extend(
                SearchMatch(queue=which, patient=PatientEntry.from_record(record), summary=record.summary())
                for record in records
                if record.id == patient_id
            )

        logger.info(f"Search for ID {patient_id} found {len(matches)} match(es)")
        return SearchResult(patient_id=patient_id, include_attention=include_attention, matches=matches)

    def process_patients(self, n: int) -> ProcessResult:
        """Bill up to n patients from the front of attention and remove them.

        The receipt session is written to the ledger before any patient is
        dequeued. If the write fails, attention is left untouched.
        """
        if n <= 0:
            logger.warning(f"Rejected processing of {n} patient(s)")
            return ProcessResult(requested=n, error=WorkflowErrorKind.INVALID_ARGUMENT, message=NON_POSITIVE_COUNT)

        if self.attention.is_empty():
            return ProcessResult(
                requested=n,
                error=WorkflowErrorKind.ATTENTION_EMPTY,
                message="No patients in attention to process.",
            )

        batch = list(islice(self.attention, n))
        items = [LedgerLineItem.for_patient(record) for record in batch]
        total = sum((item.price for item in items), Decimal("0.00"))
        session_id = cuid()
        written_at = datetime.now()

        try:
            self.ledger.append_session(items, total, written_at)
        except LedgerWriteError as e:
            logger.error(f"Receipt session {session_id} not written, attention queue left unchanged: {e}")
            return ProcessResult(
                requested=n,
                error=WorkflowErrorKind.LEDGER_WRITE_FAILED,
                message=str(e),
                session_id=session_id,
                ledger_path=str(self.ledger.path),
            )

        for expected in batch:
            record = self.attention.dequeue()
            if record is not expected:
                raise QueueUnderflow(f"Attention queue changed while processing session {session_id}")

        message = f"Processed {len(batch)} patient(s). Receipt appended to {self.ledger.path}."
        if len(batch) < n:
            message += f" Only {len(batch)} patient(s) were available to process."

        logger.info(f"Receipt session {session_id}: {len(batch)} patient(s), total {total:.2f}")
        return ProcessResult(
            requested=n,
            processed=len(batch),
            items=[
                ReceiptLine(names=item.names, patient_id=item.patient_id, reason=item.reason_label, price=item.price)
                for item in items
            ],
            total=total,
            session_id=session_id,
            ledger_path=str(self.ledger.path),
            written_at=written_at,
            message=message,
        )
