"""
Unit tests for the local filesystem storage.
"""

import os
import sys
from pathlib import Path

import pytest

from file_sorter.storage import LocalStorage


@pytest.fixture
def storage():
    return LocalStorage(use_extended_paths=False)


class TestListSubdirectories:
    """Tests for LocalStorage.list_subdirectories."""

    def test_lists_immediate_folders_sorted(self, storage, tmp_path):
        """Only direct subfolders are listed, in name order."""
        for name in ["Bob", "Anna", "Carl"]:
            (tmp_path / name).mkdir()
        (tmp_path / "Anna" / "Nested").mkdir()
        (tmp_path / "file.txt").write_text("x")

        result = storage.list_subdirectories(str(tmp_path))

        assert result == [str(tmp_path / name) for name in ["Anna", "Bob", "Carl"]]

    def test_empty_directory(self, storage, tmp_path):
        assert storage.list_subdirectories(str(tmp_path)) == []

    def test_missing_root_raises(self, storage, tmp_path):
        with pytest.raises(FileNotFoundError):
            storage.list_subdirectories(str(tmp_path / "missing"))

    def test_file_root_raises(self, storage, tmp_path):
        (tmp_path / "file.txt").write_text("x")
        with pytest.raises(NotADirectoryError):
            storage.list_subdirectories(str(tmp_path / "file.txt"))


class TestListFilesRecursively:
    """Tests for LocalStorage.list_files_recursively."""

    def test_nested_files_in_stable_order(self, storage, tmp_path):
        """Files are listed per directory in name order, parents first."""
        (tmp_path / "b").mkdir()
        (tmp_path / "a" / "deep").mkdir(parents=True)
        for rel in ["z.txt", "m.txt", "b/2.txt", "a/1.txt", "a/deep/0.txt"]:
            (tmp_path / rel).write_text("x")

        result = storage.list_files_recursively(str(tmp_path))

        expected = ["m.txt", "z.txt", "a/1.txt", "a/deep/0.txt", "b/2.txt"]
        assert result == [os.path.join(str(tmp_path), *rel.split("/")) for rel in expected]

    def test_directories_not_listed(self, storage, tmp_path):
        (tmp_path / "empty").mkdir()
        assert storage.list_files_recursively(str(tmp_path)) == []

    def test_missing_root_raises(self, storage, tmp_path):
        with pytest.raises(FileNotFoundError):
            storage.list_files_recursively(str(tmp_path / "missing"))

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="Permission bits are not enforced",
    )
    def test_unreadable_subdirectory_raises(self, storage, tmp_path):
        """An unreadable directory inside the tree is a fatal error."""
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "f.txt").write_text("x")
        locked.chmod(0)
        try:
            with pytest.raises(PermissionError):
                storage.list_files_recursively(str(tmp_path))
        finally:
            locked.chmod(0o755)

    def test_scan_error_below_root_raises(self, storage, tmp_path, monkeypatch):
        """A directory that fails to list during the walk stops enumeration."""
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "f.txt").write_text("x")
        (tmp_path / "a.txt").write_text("x")
        real_scandir = os.scandir

        def fake_scandir(path):
            if os.fspath(path) == str(locked):
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)

        with pytest.raises(PermissionError):
            storage.list_files_recursively(str(tmp_path))


class TestMove:
    """Tests for LocalStorage.move and exists."""

    def test_move_file(self, storage, tmp_path):
        src = tmp_path / "a.txt"
        dst = tmp_path / "dest" / "a.txt"
        (tmp_path / "dest").mkdir()
        src.write_text("content")

        storage.move(str(src), str(dst))

        assert not src.exists()
        assert dst.read_text() == "content"

    def test_refuses_to_overwrite(self, storage, tmp_path):
        """An existing destination is never replaced."""
        src = tmp_path / "a.txt"
        dst = tmp_path / "b.txt"
        src.write_text("new")
        dst.write_text("old")

        with pytest.raises(FileExistsError):
            storage.move(str(src), str(dst))

        assert src.read_text() == "new"
        assert dst.read_text() == "old"

    def test_missing_source_raises(self, storage, tmp_path):
        with pytest.raises(OSError):
            storage.move(str(tmp_path / "missing.txt"), str(tmp_path / "x.txt"))

    def test_missing_destination_folder_raises(self, storage, tmp_path):
        src = tmp_path / "a.txt"
        src.write_text("x")
        with pytest.raises(OSError):
            storage.move(str(src), str(tmp_path / "no" / "such" / "dir" / "a.txt"))

    def test_exists(self, storage, tmp_path):
        (tmp_path / "a.txt").write_text("x")
        assert storage.exists(str(tmp_path / "a.txt"))
        assert storage.exists(str(tmp_path))
        assert not storage.exists(str(Path(tmp_path) / "missing"))
