"""Async filesystem primitives used by the file-system tools.

All blocking calls run on anyio worker threads, so the event loop keeps
serving the transport while waiting on disk I/O.
"""
import os
from dataclasses import dataclass

import anyio
import anyio.to_thread

from ..handler_wrappers import NotFound


@dataclass(frozen=True)
class DirEntry:
    name: str
    is_dir: bool


class FilesystemProvider:
    """Stateless provider for read/list/write/mkdir.

    OSError messages propagate unchanged (they already name the path) so the
    error envelope carries the provider's text verbatim. The only translated
    failure is a missing file on read, reported as NotFound.
    """

    encoding = "utf-8"

    async def read_text(self, filepath: str) -> str:
        # Single open-and-read, missing file maps to NotFound
        try:
            return await anyio.Path(filepath).read_text(encoding=self.encoding, errors="replace")
        except FileNotFoundError as e:
            raise NotFound(f"File not found: {filepath}", filepath=filepath) from e

    async def list_entries(self, dirpath: str) -> list[DirEntry]:
        """Immediate entries of dirpath in the OS's enumeration order."""
        return await anyio.to_thread.run_sync(_scan, dirpath)

    async def write_text(self, filepath: str, content: str) -> None:
        await anyio.Path(filepath).write_text(content, encoding=self.encoding)

    async def make_dirs(self, dirpath: str) -> None:
        await anyio.Path(dirpath).mkdir(parents=True, exist_ok=True)


def _scan(dirpath: str) -> list[DirEntry]:
    with os.scandir(dirpath) as it:
        return [DirEntry(entry.name, entry.is_dir(follow_symlinks=False)) for entry in it]
