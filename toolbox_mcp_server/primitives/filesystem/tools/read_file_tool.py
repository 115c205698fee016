"""Read file tool - return the full text of one file."""
from pydantic import BaseModel, Field

from ....session import FilesystemSession
from ....tool_decorator import Tool
from ..catalog import catalog


class ReadFileParams(BaseModel):
    filepath: str = Field(description="Full path to the file to read")


@Tool(
    "read_file",
    "Read file contents from the given path",
    catalog=catalog,
)
async def read_file(params: ReadFileParams, session: FilesystemSession) -> str:
    content = await session.provider.read_text(params.filepath)
    return f"File contents of {params.filepath}:\n\n{content}"
