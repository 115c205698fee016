"""Document-store tools: read-only queries against one MongoDB database."""

from .catalog import catalog
from . import tools  # noqa: F401  (importing registers the tools)

catalog.freeze()

__all__ = ["catalog"]
