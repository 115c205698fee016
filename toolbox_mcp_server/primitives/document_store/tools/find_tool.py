"""Find tool - query a collection with filter, limit and optional sort."""
from typing import Any, Optional

from pydantic import BaseModel, Field

from ....session import DocumentStoreSession
from ....tool_decorator import Tool
from ..catalog import catalog


class FindParams(BaseModel):
    collection: str = Field(description="Name of the collection to query")
    filter: dict[str, Any] = Field(
        default={},
        description="MongoDB filter query (optional, default: {})",
    )
    limit: int = Field(
        default=10,
        ge=1,
        description="Maximum number of documents to return (optional, default: 10)",
    )
    sort: Optional[dict[str, Any]] = Field(
        default=None,
        description="Sort specification (optional, e.g., {createdAt: -1})",
    )


@Tool(
    "find",
    "Get documents from MongoDB collection with optional filter and limit",
    catalog=catalog,
)
async def find(params: FindParams, session: DocumentStoreSession) -> dict[str, Any]:
    cursor = session.database[params.collection].find(params.filter).limit(params.limit)
    if params.sort:
        # Key order of the sort object is the sort priority
        cursor = cursor.sort(list(params.sort.items()))

    documents = await cursor.to_list(length=None)

    # count is what was returned, not the total number of matches
    return {
        "collection": params.collection,
        "count": len(documents),
        "documents": documents,
    }
