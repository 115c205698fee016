"""List files tool - one line per immediate directory entry."""
from pydantic import BaseModel, Field

from ....session import FilesystemSession
from ....tool_decorator import Tool
from ..catalog import catalog


class ListFilesParams(BaseModel):
    dirpath: str = Field(description="Path to the directory to list")


@Tool(
    "list_files",
    "List files in a directory",
    catalog=catalog,
)
async def list_files(params: ListFilesParams, session: FilesystemSession) -> str:
    entries = await session.provider.list_entries(params.dirpath)

    # Native enumeration order, no sorting
    lines = [f"{'DIR' if entry.is_dir else 'FILE'} - {entry.name}" for entry in entries]
    return f"Directory contents of {params.dirpath}:\n\n" + "\n".join(lines)
