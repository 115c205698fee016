"""Capability providers backing the tool handlers."""

from .filesystem import DirEntry, FilesystemProvider

__all__ = ["DirEntry", "FilesystemProvider"]
