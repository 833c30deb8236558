"""Clinic patient flow: waiting/attention queues and a receipt ledger."""

__version__ = "0.1.0"
