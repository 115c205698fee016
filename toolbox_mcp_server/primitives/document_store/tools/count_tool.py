"""Count tool - total number of documents matching a filter."""
from typing import Any

from pydantic import BaseModel, Field

from ....session import DocumentStoreSession
from ....tool_decorator import Tool
from ..catalog import catalog


class CountParams(BaseModel):
    collection: str = Field(description="Name of the collection")
    filter: dict[str, Any] = Field(
        default={},
        description="MongoDB filter query (optional, default: {})",
    )


@Tool(
    "count",
    "Count documents in a collection with optional filter",
    catalog=catalog,
)
async def count(params: CountParams, session: DocumentStoreSession) -> dict[str, Any]:
    total = await session.database[params.collection].count_documents(params.filter)
    return {"collection": params.collection, "count": total}
