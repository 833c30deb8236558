"""Append-only receipt ledger."""

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from clinic.errors import LedgerWriteError
from clinic.models.patient import PatientRecord
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_money(amount: Decimal) -> str:
    """Format an amount as $x.yy."""
    return f"${amount.quantize(Decimal('0.01')):.2f}"


@dataclass(frozen=True)
class LedgerLineItem:
    """One billed visit in a receipt session."""

    names: str
    patient_id: str
    reason_label: str
    price: Decimal

    @classmethod
    def for_patient(cls, patient: PatientRecord) -> "LedgerLineItem":
        """Price a patient's visit by its reason."""
        return cls(
            names=patient.names,
            patient_id=patient.id,
            reason_label=patient.reason.label,
            price=patient.reason.price,
        )

    def render(self) -> str:
        """Render as `name | ID:id | reason | $price`."""
        return f"{self.names} | ID:{self.patient_id} | {self.reason_label} | {format_money(self.price)}"


class ReceiptLedger:
    """Text ledger that only ever grows by whole session blocks."""

    def __init__(self, path: str | Path):
        """Initialize ledger.

        Args:
            path: File the session blocks are appended to
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def render_session(self, items: Sequence[LedgerLineItem], total: Decimal, timestamp: datetime) -> str:
        """Render a complete session block."""
        lines = [
            "",
            f"=== Receipt Session @ {timestamp.strftime(TIMESTAMP_FORMAT)} ===",
            *(item.render() for item in items),
            f"Total: {format_money(total)}",
        ]
        return "\n".join(lines) + "\n"

    def append_session(
        self,
        items: Sequence[LedgerLineItem],
        total: Decimal,
        timestamp: datetime | None = None,
    ) -> str:
        """Append one session block to the ledger in a single write.

        Args:
            items: Line items in processing order
            total: Sum of the item prices
            timestamp: Session time, defaults to now

        Returns:
            The block that was written

        Raises:
            LedgerWriteError: If the ledger file cannot be opened or written
        """
        block = self.render_session(items, total, timestamp or datetime.now())

        with self._lock:
            try:
                with self.path.open("a", encoding="utf-8") as ledger_file:
                    ledger_file.write(block)
            except OSError as e:
                logger.error(f"Failed to append receipt session to {self.path}: {e}")
                raise LedgerWriteError(str(self.path), str(e)) from e

        logger.info(f"Appended receipt session with {len(items)} item(s) to {self.path}")
        return block

    def read(self) -> str:
        """Return the whole ledger text, or an empty string if nothing was written yet."""
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")
