"""Error types raised by the clinic workflow."""


class ClinicError(Exception):
    """Base class for clinic workflow errors."""


class QueueUnderflow(ClinicError):
    """Dequeue or peek attempted on an empty queue, or a scan disagreed with the queue size."""


class LedgerWriteError(ClinicError):
    """The receipt ledger could not be opened or written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not write receipt ledger {path}: {reason}")
        self.path = path
        self.reason = reason


class MalformedRecordError(ClinicError, ValueError):
    """A patient record line could not be parsed."""


class RecordFileError(ClinicError):
    """A patient record file exists but could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not read record file {path}: {reason}")
        self.path = path
        self.reason = reason
