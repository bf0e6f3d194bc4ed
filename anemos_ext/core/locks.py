"""Process-wide locks keyed by filesystem path."""

from __future__ import annotations

import os
import threading
from pathlib import Path

__all__ = ["path_lock"]

_LOCKS: dict[str, threading.RLock] = {}
_GUARD = threading.Lock()


def path_lock(path: Path) -> threading.RLock:
    """Return the lock owning path, creating it on first use.

    Two callers asking for the same path get the same lock, so overlapping
    writers to one destination run one after the other.
    """
    key = os.path.normcase(os.path.abspath(path))
    with _GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = threading.RLock()
            _LOCKS[key] = lock
        return lock
