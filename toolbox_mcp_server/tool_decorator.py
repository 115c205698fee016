from typing import Any, Callable, Optional, get_type_hints
import logging

from pydantic import BaseModel

from .handler_registry import ToolCatalog, ToolDescriptor
from .handler_wrappers import _error_handler, _require_session

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Tool - Decorator class that registers async functions as catalog tools
# ------------------------------------------------------------------------------
# Usage:
#   class ReadFileParams(BaseModel):
#       filepath: str = Field(description="Full path to the file to read")
#
#   @Tool("read_file", "Read file contents from the given path", catalog=catalog)
#   async def read_file(params: ReadFileParams, session: FilesystemSession) -> str:
#       ...
#
# Parameters:
#   - name: Unique tool identifier exposed to MCP clients
#   - description: Shown to AI to understand when/how to use the tool
#   - catalog: The ToolCatalog this tool belongs to
#   - require_session: If True (default), checks the session is ready first
#
# What happens at import time:
#   1. Reads the pydantic model from the `params` annotation
#   2. Wraps with _require_session if require_session=True
#   3. Wraps with _error_handler (converts outcomes to Ok/Err)
#   4. Builds the ToolDescriptor (JSON schema from the params model)
#   5. Registers descriptor + model + wrapped handler in the catalog
# ------------------------------------------------------------------------------
class Tool:
    def __init__(
        self,
        name: str,
        description: str,
        handler: Optional[Callable[..., Any]] = None,
        *,
        catalog: ToolCatalog,
        require_session: bool = True,
    ):
        self.name = name
        self.description = description
        self.catalog = catalog
        self.require_session = require_session

        # Support both @Tool(...) decorator and Tool(..., handler=fn) direct call
        if handler is not None:
            self._register(handler)

    # Called when used as @Tool(...) decorator
    def __call__(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._register(func)
        return func  # Return original so it can be called directly for testing

    def _register(self, func: Callable[..., Any]) -> None:
        params_model = _params_model(func)

        # Execution order: _error_handler -> _require_session -> func
        wrapped = func
        if self.require_session:
            wrapped = _require_session(wrapped)
        wrapped = _error_handler(wrapped)

        descriptor = ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=input_schema(params_model),
        )
        self.catalog.register_handler(descriptor, params_model, wrapped)
        logger.debug("Registered tool %s in catalog %s", self.name, self.catalog.name)


def _params_model(func: Callable[..., Any]) -> type[BaseModel]:
    hints = get_type_hints(func)
    model = hints.get("params")
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise TypeError(
            f"Tool handler {func.__name__} must annotate `params` with a pydantic model"
        )
    return model


def input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema for a params model, without pydantic's generated titles."""
    schema = model.model_json_schema()
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    schema.setdefault("type", "object")
    schema.setdefault("properties", {})
    return schema
