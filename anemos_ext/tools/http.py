"""HTTP client abstraction for release downloads.

This module provides:
- HttpResponse: status, headers and a chunked body stream
- HttpClient: Protocol for a single GET (injectable for tests)
- RealHttpClient: urllib implementation that does NOT follow redirects
- MockHttpClient: scripted responses for testing

Redirects are surfaced to the caller as ordinary 301/302 responses so the
Downloader can bound and log every hop.
"""

from __future__ import annotations

import http.client
import io
import ssl
import urllib.error
import urllib.request
from collections.abc import Iterator, Mapping
from typing import IO, Protocol, runtime_checkable

from anemos_ext.core.result import Err, Ok, Result
from anemos_ext.tools.errors import NetworkError

__all__ = [
    "HttpClient",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
    "StreamInterrupted",
    "REDIRECT_STATUSES",
]

REDIRECT_STATUSES = frozenset({301, 302})
CHUNK_SIZE = 64 * 1024


class StreamInterrupted(OSError):
    """The response body stopped before it was complete."""


class HttpResponse:
    """An open HTTP response.

    Close it (or use it as a context manager) once the body has been
    consumed or discarded.
    """

    def __init__(
        self,
        url: str,
        status: int,
        headers: Mapping[str, str],
        body: IO[bytes] | None,
    ) -> None:
        self.url = url
        self.status = status
        self.headers = headers
        self._body = body

    @property
    def location(self) -> str | None:
        return self.headers.get("Location")

    @property
    def content_length(self) -> int | None:
        value = self.headers.get("Content-Length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def is_redirect(self) -> bool:
        return self.status in REDIRECT_STATUSES

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def iter_chunks(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the body in chunks.

        Raises:
            StreamInterrupted: The connection failed mid-body.
        """
        if self._body is None:
            return
        while True:
            try:
                chunk = self._body.read(chunk_size)
            except (OSError, http.client.HTTPException) as e:
                raise StreamInterrupted(str(e) or type(e).__name__) from e
            if not chunk:
                return
            yield chunk

    def close(self) -> None:
        if self._body is not None:
            self._body.close()

    def __enter__(self) -> HttpResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests inject a mock client and avoid real network calls.
    """

    def get(self, url: str) -> Result[HttpResponse, NetworkError]:
        """Issue a GET without following redirects.

        Returns:
            Ok with the open response for any HTTP status, or Err with
            NetworkError when no response was received at all
        """
        ...


class RealHttpClient:
    """HTTP client using urllib.

    Handles HTTPS with system certificates. Redirects are not followed.
    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str = "anemos-ext/0.3.0",
        proxies: dict[str, str] | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Socket timeout in seconds (None blocks indefinitely)
            user_agent: User-Agent header value
            proxies: Explicit proxy map; None uses the environment
        """
        self.timeout = timeout
        self.user_agent = user_agent
        # HTTP(S) only, and no redirect handler: 3xx surfaces as HTTPError.
        self._opener = urllib.request.OpenerDirector()
        for handler in (
            urllib.request.ProxyHandler(proxies),
            urllib.request.HTTPHandler(),
            urllib.request.HTTPSHandler(context=ssl.create_default_context()),
            urllib.request.HTTPDefaultErrorHandler(),
            urllib.request.HTTPErrorProcessor(),
            urllib.request.UnknownHandler(),
        ):
            self._opener.add_handler(handler)

    def get(self, url: str) -> Result[HttpResponse, NetworkError]:
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        try:
            if self.timeout is None:
                response = self._opener.open(req)
            else:
                response = self._opener.open(req, timeout=self.timeout)
        except urllib.error.HTTPError as e:
            # Non-2xx statuses (redirects included) arrive as HTTPError.
            return Ok(HttpResponse(url=url, status=e.code, headers=e.headers, body=e))
        except urllib.error.URLError as e:
            return Err(NetworkError(url=url, message=str(e.reason)))
        except TimeoutError:
            return Err(NetworkError(url=url, message="Request timed out"))
        except (ValueError, OSError, http.client.HTTPException) as e:
            return Err(NetworkError(url=url, message=str(e)))

        return Ok(
            HttpResponse(url=url, status=response.status, headers=response.headers, body=response)
        )


class _InterruptedBody(io.RawIOBase):
    """Body that yields some bytes and then drops the connection."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._sent = False

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if not self._sent:
            self._sent = True
            return self._data
        raise ConnectionResetError("Connection reset by peer (mock)")


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_redirect("https://github.com/a", "https://cdn.example.com/a")
        client.set_download("https://cdn.example.com/a", b"binary")
    """

    def __init__(self) -> None:
        self._responses: dict[str, tuple[int, dict[str, str], bytes, bool] | NetworkError] = {}
        self.calls: list[str] = []

    def set_download(self, url: str, content: bytes, status: int = 200) -> None:
        self._responses[url] = (status, {}, content, False)

    def set_redirect(self, url: str, location: str | None, status: int = 302) -> None:
        headers = {"Location": location} if location is not None else {}
        self._responses[url] = (status, headers, b"", False)

    def set_status(self, url: str, status: int) -> None:
        self._responses[url] = (status, {}, b"", False)

    def set_interrupted(self, url: str, partial: bytes) -> None:
        """Serve partial content, then fail mid-stream."""
        self._responses[url] = (200, {}, partial, True)

    def set_error(self, url: str, error: NetworkError) -> None:
        self._responses[url] = error

    def get(self, url: str) -> Result[HttpResponse, NetworkError]:
        self.calls.append(url)

        if url not in self._responses:
            return Ok(HttpResponse(url=url, status=404, headers={}, body=io.BytesIO(b"")))

        response = self._responses[url]
        if isinstance(response, NetworkError):
            return Err(response)

        status, headers, content, interrupted = response
        body: IO[bytes]
        if interrupted:
            body = _InterruptedBody(content)  # type: ignore[assignment]
        else:
            body = io.BytesIO(content)
        return Ok(HttpResponse(url=url, status=status, headers=headers, body=body))
