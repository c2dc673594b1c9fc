from src.models.delivery import DeliveryAttempt, DeliveryStatus


class RetryManager:
    """Decides whether the processor redelivers a webhook, and when."""

    DEFAULT_SCHEDULE = [5, 60, 600, 3600]  # 5s, 1m, 10m, 1h

    def __init__(self, schedule: list[int] | None = None, max_retries: int | None = None):
        self.schedule = schedule or self.DEFAULT_SCHEDULE
        self.max_retries = max_retries if max_retries is not None else len(self.schedule)

    def should_retry(self, attempt: DeliveryAttempt) -> bool:
        """Redeliver on transport errors and 5xx only.

        A 4xx means the receiver looked at the delivery and refused it
        (bad signature, bad payload); sending the same bytes again cannot help.
        """
        return attempt.status is DeliveryStatus.FAILED

    def next_delay(self, retry: int) -> float:
        """Seconds to wait before retry number ``retry`` (0-indexed), clamped to the last step."""
        return float(self.schedule[min(retry, len(self.schedule) - 1)])

    def has_attempts_remaining(self, retry: int) -> bool:
        return retry < self.max_retries

    def delays(self) -> list[float]:
        return [self.next_delay(n) for n in range(self.max_retries)]

    def retry_window(self) -> float:
        """Total seconds between the first delivery and the last redelivery."""
        return sum(self.delays())
