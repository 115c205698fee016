"""Tool catalogs: ordered descriptors plus the handlers bound to them.

Tool modules register themselves into a catalog at import time. Each server
instance owns one catalog, freezes it once every tool module has been
imported, and the RequestProcessor uses it to dispatch requests.
"""
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterator

from mcp import types
from pydantic import BaseModel

from .handler_wrappers import Result, UnknownOperation


@dataclass(frozen=True)
class ToolDescriptor:
    """Advertised metadata for one tool.

    Attributes:
        name: Unique tool identifier within its catalog.
        description: Shown to the AI to understand when/how to use the tool.
        input_schema: JSON Schema of the tool's parameter object.
    """

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class ToolEntry:
    descriptor: ToolDescriptor
    params_model: type[BaseModel]
    handler: Callable[[BaseModel, Any], Awaitable[Result]]


class ToolCatalog:
    """Ordered, name-unique registry of tools for one server instance.

    Usage:
        >>> catalog = ToolCatalog("file-system", error_format="text")
        >>> # tool modules decorate handlers with @Tool(..., catalog=catalog)
        >>> catalog.freeze()
        >>> [d.name for d in catalog.list_tools()]
        ['read_file', 'list_files', ...]

    Attributes:
        name: Server name advertised to clients.
        error_format: "text" renders errors as "Error: <message>";
            "json" renders {"success": false, "error": "<message>"}.
    """

    def __init__(self, name: str, *, error_format: str = "text") -> None:
        if error_format not in ("text", "json"):
            raise ValueError(f"Unknown error format: {error_format}")
        self.name = name
        self.error_format = error_format
        self._entries: dict[str, ToolEntry] = {}
        self._frozen = False

    def register_handler(
        self,
        descriptor: ToolDescriptor,
        params_model: type[BaseModel],
        handler: Callable[[BaseModel, Any], Awaitable[Result]],
    ) -> None:
        """Register a wrapped handler under its descriptor's name."""
        if self._frozen:
            raise ValueError(f"Catalog {self.name} is frozen: cannot add {descriptor.name}")
        if descriptor.name in self._entries:
            raise ValueError(f"Handler already registered: {descriptor.name}")
        self._entries[descriptor.name] = ToolEntry(descriptor, params_model, handler)

    def get_handler(self, name: str) -> ToolEntry:
        """Get tool entry by name. Raises UnknownOperation if not found."""
        if name not in self._entries:
            raise UnknownOperation(name)
        return self._entries[name]

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        """All descriptors, in registration order."""
        return tuple(entry.descriptor for entry in self._entries.values())

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self.list_tools())

    def __len__(self) -> int:
        return len(self._entries)
