"""File-system tools: read, list and create files and folders."""

from .catalog import catalog
from . import tools  # noqa: F401  (importing registers the tools)

catalog.freeze()

__all__ = ["catalog"]
