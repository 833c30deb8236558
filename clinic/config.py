"""Service configuration."""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ClinicConfig:
    """Configuration for the clinic workflow service."""

    patient_file: str = "Patient.txt"
    receipt_file: str = "receipts.txt"
    load_on_startup: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ClinicConfig":
        """Build a config from CLINIC_* environment variables, falling back to defaults."""
        return cls(
            patient_file=os.getenv("CLINIC_PATIENT_FILE", cls.patient_file),
            receipt_file=os.getenv("CLINIC_RECEIPT_FILE", cls.receipt_file),
            load_on_startup=_env_flag("CLINIC_LOAD_ON_STARTUP", cls.load_on_startup),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )
