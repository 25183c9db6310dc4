"""
Storage access for the file sorter.

This module provides:
- Storage: The narrow filesystem contract the sorting engine depends on
- LocalStorage: The real implementation backed by the local filesystem

Enumeration errors (missing or unreadable roots) propagate to the caller.
Move errors are raised as OSError and handled by the engine.
"""

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import List, Protocol, Union

from .utils import describe_os_error, to_extended_length_path

logger = logging.getLogger(__name__)


class Storage(Protocol):
    """Filesystem operations used by the sorting engine."""

    def list_subdirectories(self, root: str) -> List[str]:
        ...

    def list_files_recursively(self, root: str) -> List[str]:
        ...

    def exists(self, path: str) -> bool:
        ...

    def move(self, src: str, dst: str) -> None:
        ...


def _check_directory(root: Union[str, Path]) -> Path:
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {root}")
    return root


class LocalStorage:
    """
    Storage backed by the local filesystem.

    Listings are sorted by name so that runs over the same tree always
    process files in the same order.
    """

    def __init__(self, use_extended_paths: bool = True):
        """
        Args:
            use_extended_paths: Whether to use the \\\\?\\ prefix for moves
                                on Windows (long path support)
        """
        self.use_extended_paths = use_extended_paths

    def list_subdirectories(self, root: str) -> List[str]:
        """
        List the immediate subdirectories of root.

        Raises:
            FileNotFoundError: If root doesn't exist
            NotADirectoryError: If root is not a directory
            PermissionError: If root cannot be read
        """
        root_path = _check_directory(root)
        with os.scandir(root_path) as it:
            entries = [entry for entry in it if entry.is_dir()]
        entries.sort(key=lambda entry: entry.name)
        return [entry.path for entry in entries]

    def list_files_recursively(self, root: str) -> List[str]:
        """
        List every file under root, depth-first, in name order.

        Files in a directory come before the files of its subdirectories.

        Raises:
            FileNotFoundError: If root doesn't exist
            NotADirectoryError: If root is not a directory
            PermissionError: If root or any directory under it cannot be read
        """
        root_path = _check_directory(root)
        files: List[str] = []

        def _raise(error: OSError) -> None:
            raise error

        for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise):
            dirnames.sort()
            for filename in sorted(filenames):
                files.append(os.path.join(dirpath, filename))

        logger.debug(f"Enumerated {len(files)} files under {root_path}")
        return files

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def move(self, src: str, dst: str) -> None:
        """
        Move a single file, never overwriting an existing destination.

        Raises:
            FileExistsError: If dst already exists
            OSError: For any other failure (permissions, path too long, ...)
        """
        if os.path.lexists(dst):
            raise FileExistsError(f"Destination already exists: {dst}")

        if sys.platform == "win32" and self.use_extended_paths:
            src = to_extended_length_path(src)
            dst = to_extended_length_path(dst)

        try:
            # shutil.move falls back to copy + delete across volumes
            shutil.move(src, dst)
        except OSError as e:
            logger.debug(f"Move failed {src} -> {dst}: {describe_os_error(e)}")
            raise
