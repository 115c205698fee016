"""Find one tool - first matching document or null."""
from typing import Any

from pydantic import BaseModel, Field

from ....session import DocumentStoreSession
from ....tool_decorator import Tool
from ..catalog import catalog


class FindOneParams(BaseModel):
    collection: str = Field(description="Name of the collection to query")
    filter: dict[str, Any] = Field(
        default={},
        description="MongoDB filter query to find specific document",
    )


@Tool(
    "find_one",
    "Get a single document from MongoDB collection",
    catalog=catalog,
)
async def find_one(params: FindOneParams, session: DocumentStoreSession) -> dict[str, Any]:
    document = await session.database[params.collection].find_one(params.filter)
    return {"collection": params.collection, "document": document}
