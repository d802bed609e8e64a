"""Tests for atomic writes and entry move/remove helpers."""

import os
from unittest.mock import patch

import pytest

from dotfilesctl.core.file_io import _fsync_parent_directory, atomic_write, move_entry, remove_entry


class TestAtomicWrite:
    """Tests for atomic_write function."""

    def test_basic_write(self, tmp_path):
        """Test basic file creation."""
        target = tmp_path / "dotfiles.toml"
        content = b"version = 1\n"

        atomic_write(str(target), content)

        assert target.read_bytes() == content

    def test_overwrite_existing(self, tmp_path):
        """Test overwriting existing file atomically."""
        target = tmp_path / "dotfiles.toml"
        target.write_bytes(b"old content")

        atomic_write(str(target), b"new content")

        assert target.read_bytes() == b"new content"

    def test_temp_file_cleanup_on_failure(self, tmp_path):
        """Test temp file is cleaned up on write failure."""
        target = tmp_path / "dotfiles.toml"
        target.write_bytes(b"previous")

        with patch('os.write', side_effect=OSError("Write failed")):
            with pytest.raises(OSError, match="Write failed"):
                atomic_write(str(target), b"content")

        assert list(tmp_path.glob(".tmp_*")) == []
        assert target.read_bytes() == b"previous"

    def test_fsync_parent_ignores_errors(self, tmp_path):
        target = tmp_path / "file"
        with patch('os.open', side_effect=OSError("unsupported")):
            _fsync_parent_directory(str(target))


class TestMoveEntry:
    """Tests for move_entry function."""

    def test_move_file_creates_parents(self, tmp_path):
        src = tmp_path / "src"
        src.write_text("data")
        dst = tmp_path / "store" / "nested" / "dst"

        move_entry(src, dst)

        assert not src.exists()
        assert dst.read_text() == "data"

    def test_move_directory(self, tmp_path):
        src = tmp_path / "src"
        (src / "sub").mkdir(parents=True)
        (src / "sub" / "file").write_text("x")
        dst = tmp_path / "dst"

        move_entry(src, dst)

        assert (dst / "sub" / "file").read_text() == "x"

    def test_existing_destination(self, tmp_path):
        """An existing directory at dst must not swallow the source."""
        src = tmp_path / "src"
        src.write_text("data")
        dst = tmp_path / "dst"
        dst.mkdir()

        with pytest.raises(FileExistsError):
            move_entry(src, dst)

        assert src.read_text() == "data"
        assert list(dst.iterdir()) == []

    def test_dangling_symlink_destination(self, tmp_path):
        src = tmp_path / "src"
        src.write_text("data")
        dst = tmp_path / "dst"
        os.symlink(tmp_path / "missing", dst)

        with pytest.raises(FileExistsError):
            move_entry(src, dst)


class TestRemoveEntry:
    """Tests for remove_entry function."""

    def test_remove_file(self, tmp_path):
        path = tmp_path / "file"
        path.write_text("")

        remove_entry(path)

        assert not path.exists()

    def test_remove_directory_tree(self, tmp_path):
        path = tmp_path / "dir"
        (path / "a" / "b").mkdir(parents=True)
        (path / "a" / "b" / "file").write_text("")

        remove_entry(path)

        assert not path.exists()

    def test_symlink_to_directory_not_followed(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        (real / "keep").write_text("")
        link = tmp_path / "link"
        os.symlink(real, link)

        remove_entry(link)

        assert not os.path.lexists(link)
        assert (real / "keep").exists()

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            remove_entry(tmp_path / "missing")
