"""Processor-side simulator: signs capture events and redelivers them on failure."""

from .engine import WebhookDeliveryEngine
from .logger import DeliveryLogger
from .retry import RetryManager
from .signer import WebhookSigner

__all__ = ["WebhookDeliveryEngine", "DeliveryLogger", "RetryManager", "WebhookSigner"]
