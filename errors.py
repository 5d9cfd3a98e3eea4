# errors.py
from __future__ import annotations


class LedgerError(Exception):
    """Base class for work-ledger failures."""


class ValidationError(LedgerError):
    """Entry fields rejected before reaching the store. Carries field -> message."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class NotFoundError(LedgerError):
    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Work entry not found: {entry_id}")


class PersistenceError(LedgerError):
    """The key-value boundary failed to read or write a value. Not retried."""


__all__ = ["LedgerError", "ValidationError", "NotFoundError", "PersistenceError"]
