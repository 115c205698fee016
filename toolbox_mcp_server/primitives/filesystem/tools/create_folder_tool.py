"""Create folder tool - mkdir -p semantics."""
from pydantic import BaseModel, Field

from ....session import FilesystemSession
from ....tool_decorator import Tool
from ..catalog import catalog


class CreateFolderParams(BaseModel):
    dirpath: str = Field(description="Path to the folder to create")


@Tool(
    "create_folder",
    "Create a new folder, including any missing parent folders. "
    "Succeeds if the folder already exists.",
    catalog=catalog,
)
async def create_folder(params: CreateFolderParams, session: FilesystemSession) -> str:
    await session.provider.make_dirs(params.dirpath)
    return f"Folder {params.dirpath} created successfully."
