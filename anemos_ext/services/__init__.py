"""Host-facing services."""

from .host import AnemosHost, ConsolePrompt, HostPaths

__all__ = ["AnemosHost", "ConsolePrompt", "HostPaths"]
