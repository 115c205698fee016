from typing import Any

from pydantic import BaseModel

from ....session import DocumentStoreSession
from ....tool_decorator import Tool
from ..catalog import catalog


class ListCollectionsParams(BaseModel):
    pass


@Tool(
    "list_collections",
    "List all collections in the database",
    catalog=catalog,
)
async def list_collections(
    params: ListCollectionsParams, session: DocumentStoreSession
) -> dict[str, Any]:
    names = await session.database.list_collection_names()
    return {"database": session.database_name, "collections": names}
