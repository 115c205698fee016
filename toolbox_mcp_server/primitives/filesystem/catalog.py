from ...handler_registry import ToolCatalog

catalog = ToolCatalog("file-system", error_format="text")
