import threading
from collections import Counter

from src.models.delivery import DeliveryAttempt, DeliveryStatus


class DeliveryLogger:
    """Thread-safe record of every delivery attempt the simulator made."""

    def __init__(self):
        self._attempts: list[DeliveryAttempt] = []
        self._lock = threading.Lock()

    def log(self, attempt: DeliveryAttempt) -> None:
        with self._lock:
            self._attempts.append(attempt)

    def get_attempts(self, event_id: str | None = None) -> list[DeliveryAttempt]:
        with self._lock:
            if event_id is None:
                return list(self._attempts)
            return [a for a in self._attempts if a.event_id == event_id]

    def get_failed_attempts(self) -> list[DeliveryAttempt]:
        """Every attempt that was not acknowledged, rejected or failed."""
        with self._lock:
            return [a for a in self._attempts if a.status is not DeliveryStatus.DELIVERED]

    def get_outcomes(self, event_id: str) -> list[str | None]:
        """Receiver-reported outcomes (credited, duplicate, ...) in delivery order."""
        return [
            a.response_body.get("outcome") if isinstance(a.response_body, dict) else None
            for a in self.get_attempts(event_id)
        ]

    def status_counts(self) -> Counter:
        with self._lock:
            return Counter(a.status for a in self._attempts)

    def clear(self) -> None:
        with self._lock:
            self._attempts.clear()
