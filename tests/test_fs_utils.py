"""Tests for filesystem utilities module."""

from __future__ import annotations

from pathlib import Path

import pytest

from a2conf.fs_utils import (
    LocalFileSystem,
    glob_async,
    is_dir_async,
    iter_text_lines,
    read_lines_async,
    write_text_async,
)


class TestLocalFileSystem:
    """Tests for LocalFileSystem."""

    @pytest.mark.filesystem
    def test_exists_and_is_dir(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        conf = tmp_path / "a.conf"
        conf.write_text("Listen 80\n")

        assert fs.exists(str(conf))
        assert not fs.is_dir(str(conf))
        assert fs.is_dir(str(tmp_path))
        assert not fs.exists(str(tmp_path / "missing.conf"))

    @pytest.mark.filesystem
    def test_glob_is_sorted(self, tmp_path: Path) -> None:
        """Matches come back in sorted order regardless of creation order."""
        for name in ("c.conf", "a.conf", "b.conf", "notes.txt"):
            (tmp_path / name).write_text("")

        result = LocalFileSystem().glob(str(tmp_path / "*.conf"))

        assert result == [str(tmp_path / n) for n in ("a.conf", "b.conf", "c.conf")]

    @pytest.mark.filesystem
    def test_glob_without_matches(self, tmp_path: Path) -> None:
        assert LocalFileSystem().glob(str(tmp_path / "*.conf")) == []

    @pytest.mark.filesystem
    def test_read_lines_strips_terminators(self, tmp_path: Path) -> None:
        conf = tmp_path / "a.conf"
        conf.write_bytes(b"Listen 80\r\nKeepAlive On\n")

        assert list(LocalFileSystem().read_lines(str(conf))) == ["Listen 80", "KeepAlive On"]

    @pytest.mark.filesystem
    def test_read_lines_missing_file_raises_immediately(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            LocalFileSystem().read_lines(str(tmp_path / "missing.conf"))

    @pytest.mark.filesystem
    def test_write_text_overwrites(self, tmp_path: Path) -> None:
        conf = tmp_path / "a.conf"
        conf.write_text("old content that is longer")

        LocalFileSystem().write_text(str(conf), "Listen 80\n")

        assert conf.read_text() == "Listen 80\n"


class TestIterTextLines:
    """Tests for iter_text_lines function."""

    def test_splits_on_newline(self) -> None:
        assert list(iter_text_lines("a\nb\n")) == ["a", "b", ""]

    def test_empty_text(self) -> None:
        assert list(iter_text_lines("")) == [""]


class TestAsyncHelpers:
    """Tests for the thread-pool wrappers."""

    @pytest.mark.asyncio
    @pytest.mark.filesystem
    async def test_read_lines_async(self, tmp_path: Path) -> None:
        conf = tmp_path / "a.conf"
        conf.write_text("Listen 80\nKeepAlive On\n")

        lines = await read_lines_async(LocalFileSystem(), str(conf))

        assert lines == ["Listen 80", "KeepAlive On"]

    @pytest.mark.asyncio
    @pytest.mark.filesystem
    async def test_read_lines_async_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await read_lines_async(LocalFileSystem(), str(tmp_path / "missing.conf"))

    @pytest.mark.asyncio
    @pytest.mark.filesystem
    async def test_glob_async(self, tmp_path: Path) -> None:
        (tmp_path / "b.conf").write_text("")
        (tmp_path / "a.conf").write_text("")

        result = await glob_async(LocalFileSystem(), str(tmp_path / "*.conf"))

        assert result == [str(tmp_path / "a.conf"), str(tmp_path / "b.conf")]

    @pytest.mark.asyncio
    @pytest.mark.filesystem
    async def test_is_dir_async(self, tmp_path: Path) -> None:
        conf = tmp_path / "a.conf"
        conf.write_text("")
        fs = LocalFileSystem()

        assert await is_dir_async(fs, str(tmp_path)) is True
        assert await is_dir_async(fs, str(conf)) is False
        assert await is_dir_async(fs, str(tmp_path / "missing")) is False

    @pytest.mark.asyncio
    @pytest.mark.filesystem
    async def test_write_text_async_unicode(self, tmp_path: Path) -> None:
        conf = tmp_path / "a.conf"
        content = "ServerAdmin admin@пример.рф\n"

        await write_text_async(LocalFileSystem(), str(conf), content)

        assert conf.read_text(encoding="utf-8") == content

    @pytest.mark.asyncio
    @pytest.mark.filesystem
    async def test_write_text_async_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await write_text_async(LocalFileSystem(), str(tmp_path / "nope" / "a.conf"), "")
