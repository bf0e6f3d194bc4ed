"""Local HTTP server serving fake release assets."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

ASSET = b"\x7fELF fake anemos binary"


class _ReleaseHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:  # noqa: N802
        if self.path == "/releases/latest/download/anemos-linux-amd64":
            self.send_response(302)
            self.send_header("Location", "/cdn/anemos-linux-amd64")
            self.end_headers()
        elif self.path == "/cdn/anemos-linux-amd64":
            self.send_response(200)
            self.send_header("Content-Length", str(len(ASSET)))
            self.end_headers()
            self.wfile.write(ASSET)
        elif self.path == "/loop":
            self.send_response(301)
            self.send_header("Location", "/loop")
            self.end_headers()
        elif self.path == "/to-file":
            self.send_response(302)
            self.send_header("Location", "file:///etc/hostname")
            self.end_headers()
        elif self.path == "/truncated":
            self.send_response(200)
            self.send_header("Content-Length", "1000")
            self.end_headers()
            self.wfile.write(ASSET[:10])
            self.close_connection = True
        else:
            self.send_response(404)
            self.send_header("Content-Length", "0")
            self.end_headers()

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture
def release_server() -> Iterator[str]:
    """Base URL of a release server running on localhost."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _ReleaseHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def release_asset() -> bytes:
    """Bytes served for the anemos-linux-amd64 asset."""
    return ASSET
