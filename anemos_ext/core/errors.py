"""Exit codes for CLI commands.

Values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad arguments, declined download)
- 2: Environment error (binary missing, bad config)
- 3: Tool error (anemos exited non-zero)
- 4: Network error (download failed, endpoint unreachable)
- 5: I/O error (cache or record not writable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    TOOL_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
