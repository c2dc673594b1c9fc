# Run the receiver:
#   RAZORPAY_WEBHOOK_SECRET=... python -m src.webhook_receiver

import logging

from src.config import ReceiverConfig
from src.webhook_receiver import LedgerWebhookServer, build_controller, build_store

logger = logging.getLogger("src.webhook_receiver")


def main() -> None:
    config = ReceiverConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not config.webhook_secret:
        logger.error("RAZORPAY_WEBHOOK_SECRET is not set; deliveries will be answered with 500")

    store = build_store(config)
    server = LedgerWebhookServer(build_controller(config, store), host=config.host, port=config.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
