"""Tests for anemos_ext.core.locks module."""

from __future__ import annotations

import threading
import time
from pathlib import Path

from anemos_ext.core.locks import path_lock


class TestPathLock:
    def test_same_path_same_lock(self, tmp_path: Path) -> None:
        assert path_lock(tmp_path / "cache") is path_lock(tmp_path / "cache")

    def test_equivalent_spellings(self, tmp_path: Path) -> None:
        assert path_lock(tmp_path / "cache") is path_lock(tmp_path / "x" / ".." / "cache")

    def test_different_paths(self, tmp_path: Path) -> None:
        assert path_lock(tmp_path / "a") is not path_lock(tmp_path / "b")

    def test_serialises_writers(self, tmp_path: Path) -> None:
        """Overlapping critical sections run one after the other."""
        active = 0
        peak = 0
        guard = threading.Lock()

        def work() -> None:
            nonlocal active, peak
            with path_lock(tmp_path):
                with guard:
                    active += 1
                    peak = max(peak, active)
                time.sleep(0.01)
                with guard:
                    active -= 1

        threads = [threading.Thread(target=work) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert peak == 1
