"""Anemos tool lifecycle management for editor and CLI hosts."""

__version__ = "0.3.0"
