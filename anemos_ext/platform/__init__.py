"""Platform abstraction layer."""

from .detection import (
    Arch,
    Platform,
    PlatformTarget,
    detect_target,
    is_windows,
)
from .paths import (
    home,
    user_cache_dir,
    user_config_dir,
)
from .process import (
    ProcessError,
    probe,
    run,
    run_silent,
)

__all__ = [
    # detection
    "Arch",
    "Platform",
    "PlatformTarget",
    "detect_target",
    "is_windows",
    # paths
    "home",
    "user_cache_dir",
    "user_config_dir",
    # process
    "ProcessError",
    "probe",
    "run",
    "run_silent",
]
