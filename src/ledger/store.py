"""Ledger stores: per-user records with an optimistic read-modify-write.

Every backend implements two primitives:

- ``_read(user_id)`` returns ``(record, version)`` or ``(None, None)``.
- ``_write(user_id, record, expected_version)`` persists the record only if
  the stored version still equals ``expected_version`` (``None`` meaning
  "must not exist yet") and raises ``WriteConflict`` otherwise.

``update()`` builds the retry loop on top of them, so a mutator never runs
while holding a lock and two concurrent writers can never both commit
against the same version.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from src.errors import StoreFailure, WriteConflict
from src.models.ledger import LedgerRecord

logger = logging.getLogger(__name__)

Mutator = Callable[[LedgerRecord | None], LedgerRecord | None]


class LedgerStore(ABC):
    """Base class for ledger backends."""

    def __init__(self, max_write_attempts: int = 10):
        if max_write_attempts < 1:
            raise ValueError("max_write_attempts must be at least 1")
        self.max_write_attempts = max_write_attempts

    @abstractmethod
    def _read(self, user_id: str) -> tuple[LedgerRecord | None, Any]: ...

    @abstractmethod
    def _write(self, user_id: str, record: LedgerRecord, expected_version: Any) -> None: ...

    def get(self, user_id: str) -> LedgerRecord | None:
        record, _ = self._read(user_id)
        return record

    @abstractmethod
    def set(self, user_id: str, record: LedgerRecord) -> None:
        """Unconditional write, for seeding and administration."""

    def update(self, user_id: str, mutator: Mutator) -> LedgerRecord | None:
        """Apply mutator to the current record with optimistic concurrency.

        The mutator gets the current record (or None) and returns the
        replacement, or None to leave the record untouched. It may be called
        more than once, so it must not have side effects.

        Returns the committed record, or the current one when the mutator
        declined to write.

        Raises:
            StoreFailure: conflicts persisted for max_write_attempts tries.
        """
        for attempt in range(1, self.max_write_attempts + 1):
            current, version = self._read(user_id)
            replacement = mutator(current)
            if replacement is None:
                return current
            try:
                self._write(user_id, replacement, version)
            except WriteConflict:
                logger.debug(
                    "Write conflict on ledger %s (attempt %d/%d)",
                    user_id, attempt, self.max_write_attempts,
                )
                continue
            return replacement

        logger.error(
            "Gave up updating ledger %s after %d conflicting writes",
            user_id, self.max_write_attempts,
        )
        raise StoreFailure(
            f"ledger {user_id} still conflicting after {self.max_write_attempts} attempts"
        )


class InMemoryLedgerStore(LedgerStore):
    """Thread-safe in-process store with an integer version per record."""

    def __init__(self, max_write_attempts: int = 10):
        super().__init__(max_write_attempts)
        self._records: dict[str, tuple[LedgerRecord, int]] = {}
        self._lock = threading.Lock()
        self._write_count = 0

    def _read(self, user_id: str) -> tuple[LedgerRecord | None, int | None]:
        with self._lock:
            entry = self._records.get(user_id)
        if entry is None:
            return None, None
        return entry

    def _write(self, user_id: str, record: LedgerRecord, expected_version: int | None) -> None:
        with self._lock:
            entry = self._records.get(user_id)
            current_version = entry[1] if entry is not None else None
            if current_version != expected_version:
                raise WriteConflict(
                    f"ledger {user_id} is at version {current_version}, expected {expected_version}"
                )
            self._records[user_id] = (record, (current_version or 0) + 1)
            self._write_count += 1

    def set(self, user_id: str, record: LedgerRecord) -> None:
        with self._lock:
            entry = self._records.get(user_id)
            version = entry[1] if entry is not None else 0
            self._records[user_id] = (record, version + 1)
            self._write_count += 1

    @property
    def write_count(self) -> int:
        """Number of committed writes, across all users."""
        with self._lock:
            return self._write_count

    def user_ids(self) -> list[str]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._write_count = 0
