"""Release asset downloader.

Fetches a URL into a destination file:
- follows 301/302 redirects up to a fixed number of hops, to http(s) URLs only
- streams the body straight to the destination (no temp file)
- deletes the destination on any failure, so a later cache probe never
  trusts a truncated binary
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlsplit

from anemos_ext.core.config import DEFAULT_MAX_REDIRECTS
from anemos_ext.core.logging import get_logger
from anemos_ext.core.result import Err, Ok, Result
from anemos_ext.platform.files import remove_quietly
from anemos_ext.tools.errors import (
    DownloadError,
    DownloadFailed,
    NetworkError,
    TooManyRedirects,
    WriteFailed,
)
from anemos_ext.tools.http import StreamInterrupted

if TYPE_CHECKING:
    from anemos_ext.tools.http import HttpClient, HttpResponse

__all__ = ["Downloader"]

log = get_logger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


class Downloader:
    """Downloads a single URL to a file.

    Usage:
        downloader = Downloader(RealHttpClient())
        result = downloader.fetch(url, cache_dir / "anemos")
        if is_ok(result):
            print(f"Downloaded to: {result.value}")
    """

    def __init__(self, http: HttpClient, *, max_redirects: int = DEFAULT_MAX_REDIRECTS) -> None:
        """Initialize downloader.

        Args:
            http: HTTP client for requests
            max_redirects: Redirect hops allowed before giving up
        """
        self._http = http
        self._max_redirects = max_redirects

    @property
    def max_redirects(self) -> int:
        return self._max_redirects

    def fetch(self, url: str, dest: Path) -> Result[Path, DownloadError]:
        """Download url to dest.

        Args:
            url: URL to download
            dest: Destination file; its parent must exist

        Returns:
            Ok with dest, or Err with the first error encountered
        """
        result = self._fetch(url, dest)
        if isinstance(result, Err):
            log.warning("download failed", url=url, dest=str(dest), error=str(result.error))
            cleanup_error = remove_quietly(dest)
            if cleanup_error is not None:
                log.warning(
                    "could not remove partial download", dest=str(dest), error=str(cleanup_error)
                )
        return result

    def _fetch(self, url: str, dest: Path) -> Result[Path, DownloadError]:
        current = url
        for _hop in range(self._max_redirects + 1):
            opened = self._http.get(current)
            if isinstance(opened, Err):
                return opened

            with opened.value as response:
                if response.is_redirect:
                    location = response.location
                    if not location:
                        return Err(DownloadFailed(url=current, status=response.status))
                    target = urljoin(current, location)
                    if urlsplit(target).scheme not in ALLOWED_SCHEMES:
                        message = f"Refusing redirect to non-HTTP URL {target!r}"
                        return Err(NetworkError(url=current, message=message))
                    log.debug("following redirect", status=response.status, location=target)
                    current = target
                    continue

                if not response.is_success:
                    return Err(DownloadFailed(url=current, status=response.status))

                return self._stream(response, dest)

        return Err(TooManyRedirects(url=url, limit=self._max_redirects))

    def _stream(self, response: HttpResponse, dest: Path) -> Result[Path, DownloadError]:
        size = 0
        try:
            with open(dest, "wb") as f:
                for chunk in response.iter_chunks():
                    f.write(chunk)
                    size += len(chunk)
        except StreamInterrupted as e:
            return Err(NetworkError(url=response.url, message=f"Download interrupted: {e}"))
        except OSError as e:
            return Err(WriteFailed(path=dest, message=f"Cannot write download ({e.strerror or e})"))

        # urllib reports a short body as a clean EOF.
        expected = response.content_length
        if expected is not None and size != expected:
            return Err(
                NetworkError(
                    url=response.url,
                    message=f"Download incomplete: got {size} of {expected} bytes",
                )
            )

        log.info("download complete", url=response.url, dest=str(dest), size=size)
        return Ok(dest)
