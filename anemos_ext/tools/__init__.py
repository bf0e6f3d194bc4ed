"""Anemos binary management.

This package provides:
- Release asset naming (release.py)
- HTTP client and downloader (http.py, download.py)
- Binary resolution: search path, cache, download (resolver.py)
- Declaration sync against the active version (record.py, declarations.py)
"""

from anemos_ext.tools.declarations import DeclarationSynchronizer, SyncOutcome, types_dir
from anemos_ext.tools.download import Downloader
from anemos_ext.tools.errors import (
    AcquisitionDeclined,
    BinaryUnavailable,
    DownloadError,
    DownloadFailed,
    NetworkError,
    SyncError,
    ToolInvocationFailed,
    TooManyRedirects,
    WriteFailed,
)
from anemos_ext.tools.http import HttpClient, HttpResponse, MockHttpClient, RealHttpClient
from anemos_ext.tools.record import VersionRecord, load_record, save_record
from anemos_ext.tools.release import ReleaseSource
from anemos_ext.tools.resolver import (
    AcquisitionPrompt,
    LocationSource,
    ToolLocation,
    ToolResolver,
)

__all__ = [
    # Errors
    "AcquisitionDeclined",
    "BinaryUnavailable",
    "DownloadError",
    "DownloadFailed",
    "NetworkError",
    "SyncError",
    "ToolInvocationFailed",
    "TooManyRedirects",
    "WriteFailed",
    # HTTP
    "HttpClient",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
    # Download
    "Downloader",
    "ReleaseSource",
    # Resolve
    "AcquisitionPrompt",
    "LocationSource",
    "ToolLocation",
    "ToolResolver",
    # Declarations
    "DeclarationSynchronizer",
    "SyncOutcome",
    "VersionRecord",
    "load_record",
    "save_record",
    "types_dir",
]
