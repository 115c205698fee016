"""Tests for the file-system tools, run through the request processor."""
from __future__ import annotations

from pathlib import Path

from toolbox_mcp_server.request_processor import RequestProcessor


class TestReadFile:
    async def test_round_trip_with_create_file(self, fs_processor: RequestProcessor, tmp_path: Path):
        path = str(tmp_path / "notes.txt")
        content = "first line\nsecond line ünïcödé\n"

        created = await fs_processor.dispatch("create_file", {"filepath": path, "content": content})
        assert created.is_error is False

        result = await fs_processor.dispatch("read_file", {"filepath": path})
        assert result.is_error is False
        assert result.body == f"File contents of {path}:\n\n{content}"

    async def test_missing_file_is_error_naming_path(self, fs_processor: RequestProcessor):
        result = await fs_processor.dispatch("read_file", {"filepath": "/nonexistent/path"})
        assert result.is_error is True
        assert "Error" in result.body
        assert "/nonexistent/path" in result.body
        assert "Traceback" not in result.body

    async def test_invalid_utf8_is_replaced(self, fs_processor: RequestProcessor, tmp_path: Path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"caf\xe9 ok")

        result = await fs_processor.dispatch("read_file", {"filepath": str(path)})
        assert result.is_error is False
        assert result.body == f"File contents of {path}:\n\ncaf� ok"

    async def test_directory_is_provider_failure(self, fs_processor: RequestProcessor, tmp_path: Path):
        result = await fs_processor.dispatch("read_file", {"filepath": str(tmp_path)})
        assert result.is_error is True
        assert result.body.startswith("Error: ")

    async def test_missing_filepath_is_rejected_before_handler(self, fs_processor: RequestProcessor):
        result = await fs_processor.dispatch("read_file", {})
        assert result.is_error is True
        assert "read_file" in result.body
        assert "filepath" in result.body


class TestListFiles:
    async def test_empty_directory(self, fs_processor: RequestProcessor, tmp_path: Path):
        result = await fs_processor.dispatch("list_files", {"dirpath": str(tmp_path)})
        assert result.is_error is False
        assert result.body == f"Directory contents of {tmp_path}:\n\n"

    async def test_entries_tagged_by_type(self, fs_processor: RequestProcessor, tmp_path: Path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "b.md").write_text("b")

        result = await fs_processor.dispatch("list_files", {"dirpath": str(tmp_path)})
        assert result.is_error is False

        header, listing = result.body.split("\n\n", 1)
        assert header == f"Directory contents of {tmp_path}:"
        assert set(listing.splitlines()) == {"DIR - sub", "FILE - a.txt", "FILE - b.md"}

    async def test_entries_are_not_recursive(self, fs_processor: RequestProcessor, tmp_path: Path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "inner.txt").write_text("x")

        result = await fs_processor.dispatch("list_files", {"dirpath": str(tmp_path)})
        assert "inner.txt" not in result.body

    async def test_missing_directory(self, fs_processor: RequestProcessor, tmp_path: Path):
        missing = str(tmp_path / "nope")
        result = await fs_processor.dispatch("list_files", {"dirpath": missing})
        assert result.is_error is True
        assert missing in result.body


class TestCreateFile:
    async def test_overwrites_existing_file(self, fs_processor: RequestProcessor, tmp_path: Path):
        path = tmp_path / "out.txt"
        path.write_text("old contents that are longer")

        result = await fs_processor.dispatch("create_file", {"filepath": str(path), "content": "new"})
        assert result.is_error is False
        assert result.body == f"File {path} created successfully."
        assert path.read_text() == "new"

    async def test_empty_content(self, fs_processor: RequestProcessor, tmp_path: Path):
        path = tmp_path / "empty.txt"
        result = await fs_processor.dispatch("create_file", {"filepath": str(path), "content": ""})
        assert result.is_error is False
        assert path.read_text() == ""

    async def test_missing_parent_directory(self, fs_processor: RequestProcessor, tmp_path: Path):
        path = str(tmp_path / "missing" / "out.txt")
        result = await fs_processor.dispatch("create_file", {"filepath": path, "content": "x"})
        assert result.is_error is True
        assert result.body.startswith("Error: ")
        assert path in result.body

    async def test_content_is_required(self, fs_processor: RequestProcessor, tmp_path: Path):
        result = await fs_processor.dispatch("create_file", {"filepath": str(tmp_path / "x")})
        assert result.is_error is True
        assert "content" in result.body
        assert not (tmp_path / "x").exists()


class TestCreateFolder:
    async def test_creates_intermediate_directories(self, fs_processor: RequestProcessor, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        result = await fs_processor.dispatch("create_folder", {"dirpath": str(target)})
        assert result.is_error is False
        assert result.body == f"Folder {target} created successfully."
        assert target.is_dir()

    async def test_existing_folder_is_success(self, fs_processor: RequestProcessor, tmp_path: Path):
        target = str(tmp_path / "again")
        first = await fs_processor.dispatch("create_folder", {"dirpath": target})
        second = await fs_processor.dispatch("create_folder", {"dirpath": target})
        assert first.is_error is False
        assert second.is_error is False

    async def test_path_occupied_by_file(self, fs_processor: RequestProcessor, tmp_path: Path):
        occupied = tmp_path / "file"
        occupied.write_text("x")
        result = await fs_processor.dispatch("create_folder", {"dirpath": str(occupied)})
        assert result.is_error is True
