from ...handler_registry import ToolCatalog

catalog = ToolCatalog("mongodb-connector", error_format="json")
