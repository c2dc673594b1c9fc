import json
import logging
import threading
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from typing import Self

from src.webhook_receiver.controller import WebhookController, WebhookResponse

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/webhook"


class _WebhookHandler(BaseHTTPRequestHandler):
    """HTTP request handler for processor webhooks."""

    def _send_json(self, response: WebhookResponse) -> None:
        payload = json.dumps(response.body).encode()
        self.send_response(response.status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def do_POST(self):
        if self.path.split("?", 1)[0] != WEBHOOK_PATH:
            self._send_json(WebhookResponse(404, {"error": "not found"}))
            return

        # Raw bytes straight off the socket; the signature covers exactly these
        try:
            content_length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            self._send_json(WebhookResponse(400, {"error": "invalid content length"}))
            return
        body = self.rfile.read(content_length) if content_length > 0 else b""

        controller: WebhookController = self.server.controller  # type: ignore[attr-defined]
        response = controller.handle(body, dict(self.headers.items()))
        self._send_json(response)

    def do_GET(self):
        if self.path.split("?", 1)[0] == "/health":
            self._send_json(WebhookResponse(200, {"status": "ok"}))
            return
        self._send_json(WebhookResponse(404, {"error": "not found"}))

    def log_message(self, format, *args):
        """Suppress default request logging."""
        pass


class LedgerWebhookServer:
    """Threaded HTTP server exposing POST /webhook in front of a WebhookController."""

    def __init__(self, controller: WebhookController, host: str = "127.0.0.1", port: int = 0):
        self._controller = controller
        self._host = host
        self._port = port
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def _bind(self) -> ThreadingHTTPServer:
        server = ThreadingHTTPServer((self._host, self._port), _WebhookHandler)
        server.controller = self._controller  # type: ignore[attr-defined]
        # Get the actual port (useful when port=0)
        self._port = server.server_address[1]
        logger.info("Webhook receiver listening on %s:%d", self._host, self._port)
        return server

    def start(self) -> Self:
        self._server = self._bind()
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()
        return self

    def serve_forever(self) -> None:
        """Run in the calling thread until interrupted."""
        self._server = self._bind()
        try:
            self._server.serve_forever()
        finally:
            self._server.server_close()
            self._server = None

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def url(self) -> str:
        return f"http://{self._host}:{self._port}{WEBHOOK_PATH}"

    @property
    def port(self) -> int:
        return self._port
