# primitives/__init__.py
"""MCP primitives module - the tool catalogs of both server instances."""

from .document_store import catalog as document_store_catalog
from .filesystem import catalog as filesystem_catalog


__all__ = ["document_store_catalog", "filesystem_catalog"]
