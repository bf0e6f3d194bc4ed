"""Version record for generated declarations.

The record lives at {types_dir}/version.json:

    {"version": "1.4.2", "generated": "2026-10-19T08:12:44.120Z"}

It names the tool version the declarations in types_dir were generated
with. A missing or unreadable record means the declarations are stale.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from anemos_ext.core.structured import as_str_dict, get_str
from anemos_ext.platform.files import atomic_write_text

__all__ = ["VersionRecord", "clear_record", "load_record", "record_path", "save_record"]

RECORD_FILENAME = "version.json"


@dataclass(frozen=True, slots=True)
class VersionRecord:
    """Which tool version last generated the declarations.

    Attributes:
        version: Tool version string as printed by --version
        generated: ISO-8601 UTC timestamp of generation
    """

    version: str
    generated: str

    @classmethod
    def now(cls, version: str) -> VersionRecord:
        """Create a record stamped with the current UTC time."""
        stamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return cls(version=version, generated=stamp)


def record_path(types_dir: Path) -> Path:
    return types_dir / RECORD_FILENAME


def load_record(types_dir: Path) -> VersionRecord | None:
    """Load the record, or None if it is missing or unreadable."""
    path = record_path(types_dir)
    if not path.exists():
        return None

    try:
        data = as_str_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    if data is None:
        return None

    version = get_str(data, "version")
    if version is None:
        return None
    return VersionRecord(version=version, generated=get_str(data, "generated") or "")


def save_record(types_dir: Path, record: VersionRecord) -> None:
    """Write the record atomically.

    Raises:
        OSError: The record could not be written.
    """
    atomic_write_text(record_path(types_dir), json.dumps(asdict(record)), encoding="utf-8")


def clear_record(types_dir: Path) -> None:
    """Remove the record so readers treat the declarations as stale.

    Raises:
        OSError: The record exists but could not be removed.
    """
    record_path(types_dir).unlink(missing_ok=True)
