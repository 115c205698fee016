"""Create file tool - write text to a path, replacing any existing file."""
from pydantic import BaseModel, Field

from ....session import FilesystemSession
from ....tool_decorator import Tool
from ..catalog import catalog


class CreateFileParams(BaseModel):
    filepath: str = Field(description="Full path to the file to create")
    content: str = Field(description="Content to write to the file")


@Tool(
    "create_file",
    "Create a new file with the given content. An existing file at the path is overwritten.",
    catalog=catalog,
)
async def create_file(params: CreateFileParams, session: FilesystemSession) -> str:
    await session.provider.write_text(params.filepath, params.content)
    return f"File {params.filepath} created successfully."
