import time
import uuid
from datetime import datetime, timezone

import requests

from src.models.delivery import DeliveryAttempt, DeliveryStatus
from src.models.webhook import WebhookEvent
from src.utils.factories import encode_body
from src.webhook_simulator.logger import DeliveryLogger
from src.webhook_simulator.retry import RetryManager
from src.webhook_simulator.signer import WebhookSigner


class WebhookDeliveryEngine:
    """Delivers signed webhook bodies to a receiver, retrying like the processor."""

    def __init__(
        self,
        signer: WebhookSigner,
        retry_manager: RetryManager,
        logger: DeliveryLogger,
        timeout_seconds: float = 30,
    ):
        self.signer = signer
        self.retry_manager = retry_manager
        self.logger = logger
        self.timeout_seconds = timeout_seconds

    def prepare(self, event: WebhookEvent) -> tuple[bytes, dict[str, str]]:
        """Serialize once and sign those exact bytes."""
        body = encode_body(event.payload)
        event.signature = self.signer.sign(body)
        headers = {
            "Content-Type": "application/json",
            "X-Razorpay-Signature": event.signature,
            "X-Razorpay-Event-Id": event.event_id,
        }
        return body, headers

    def send(self, event_id: str, url: str, body: bytes, headers: dict[str, str]) -> DeliveryAttempt:
        """POST prepared bytes and log the attempt. Transport errors are recorded, not raised."""
        start = time.monotonic()
        status_code = None
        response_body = None
        error = None

        try:
            resp = requests.post(url, data=body, headers=headers, timeout=self.timeout_seconds)
            status_code = resp.status_code
            try:
                response_body = resp.json()
            except ValueError:
                response_body = None
        except requests.exceptions.Timeout:
            error = "timeout"
        except requests.exceptions.ConnectionError:
            error = "connection_error"
        except requests.exceptions.RequestException as e:
            error = str(e)

        elapsed_ms = (time.monotonic() - start) * 1000

        attempt = DeliveryAttempt(
            attempt_id=f"att_{uuid.uuid4().hex[:16]}",
            event_id=event_id,
            url=url,
            status_code=status_code,
            timestamp=datetime.now(timezone.utc),
            response_time_ms=elapsed_ms,
            response_body=response_body,
            error=error,
        )
        self.logger.log(attempt)
        return attempt

    def deliver(self, event: WebhookEvent, url: str) -> DeliveryAttempt:
        """Deliver a single webhook event. Returns the delivery attempt result."""
        body, headers = self.prepare(event)
        return self.send(event.event_id, url, body, headers)

    def deliver_with_retry(
        self,
        event: WebhookEvent,
        url: str,
        delay_factor: float = 1.0,
    ) -> list[DeliveryAttempt]:
        """Deliver with automatic retries on failure.

        Every retry sends byte-for-byte the same body and signature.

        Args:
            event: The webhook event to deliver.
            url: The receiver endpoint URL.
            delay_factor: Multiplier for retry delays (use 0 in tests to skip waits).

        Returns:
            List of all delivery attempts made.
        """
        body, headers = self.prepare(event)
        attempts = []
        retry_count = 0

        while True:
            attempt = self.send(event.event_id, url, body, headers)
            attempts.append(attempt)

            if attempt.status is DeliveryStatus.DELIVERED:
                break

            if not self.retry_manager.should_retry(attempt):
                break

            if not self.retry_manager.has_attempts_remaining(retry_count):
                break

            delay = self.retry_manager.next_delay(retry_count) * delay_factor
            if delay > 0:
                time.sleep(delay)

            retry_count += 1

        return attempts

    def redeliver(self, event: WebhookEvent, url: str) -> DeliveryAttempt:
        """Send an already-delivered event again, as the processor does when unsure it landed."""
        return self.deliver(event, url)
