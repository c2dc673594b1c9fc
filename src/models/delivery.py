from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DeliveryStatus(Enum):
    DELIVERED = "DELIVERED"  # 2xx, processor stops retrying
    REJECTED = "REJECTED"  # 4xx, processor gives up
    FAILED = "FAILED"  # 5xx or transport error, processor retries


@dataclass
class DeliveryAttempt:
    attempt_id: str
    event_id: str
    url: str
    status_code: int | None
    timestamp: datetime
    response_time_ms: float
    response_body: dict | None = None
    error: str | None = None

    @property
    def status(self) -> DeliveryStatus:
        if self.status_code is None or self.status_code >= 500:
            return DeliveryStatus.FAILED
        if self.status_code >= 400:
            return DeliveryStatus.REJECTED
        return DeliveryStatus.DELIVERED
