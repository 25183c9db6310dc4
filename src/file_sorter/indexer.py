"""
Destination indexer for building match keywords from folder names.

This module is responsible for:
- Listing the destination folders under a target root
- Splitting folder names such as "John Smith, Anna Lee" into names
- Deriving keywords: each trimmed name plus its space-stripped variant
- Detecting keywords shared by more than one destination folder
"""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from .storage import LocalStorage, Storage
from .types import DestinationEntry, KeywordOccurrence

logger = logging.getLogger(__name__)

NAME_SEPARATOR = ", "


def extract_keywords(folder_name: str) -> Set[str]:
    """
    Derive match keywords from a destination folder name.

    The name is split on ", " and every resulting name contributes its
    trimmed form and the same form with all spaces removed. Empty names
    are dropped.

    Args:
        folder_name: The folder's basename

    Returns:
        Set of keywords (may be empty)

    Examples:
        >>> sorted(extract_keywords("John Smith, Anna"))
        ['Anna', 'John Smith', 'JohnSmith']
    """
    keywords: Set[str] = set()
    for raw_name in folder_name.split(NAME_SEPARATOR):
        name = raw_name.strip()
        if not name:
            continue
        keywords.add(name)
        keywords.add(name.replace(" ", ""))
    return keywords


def build_index(folder_paths: Iterable[str]) -> Dict[str, DestinationEntry]:
    """
    Build the keyword index for a set of destination folders.

    Folders whose names yield no keywords are left out.

    Args:
        folder_paths: Full paths of the destination folders

    Returns:
        Dict mapping folder path to its DestinationEntry, in input order
    """
    index: Dict[str, DestinationEntry] = {}
    for path in folder_paths:
        name = Path(path).name
        keywords = extract_keywords(name)
        if not keywords:
            logger.debug(f"No keywords in folder name, ignoring: {path}")
            continue
        index[path] = DestinationEntry(path=path, name=name, keywords=frozenset(keywords))
        logger.debug(f"Indexed '{name}': {sorted(keywords)}")
    return index


def keyword_occurrences(entries: Iterable[DestinationEntry]) -> List[KeywordOccurrence]:
    """Flatten an index into (keyword, folder) pairs."""
    return [
        KeywordOccurrence(keyword=keyword, destination_path=entry.path)
        for entry in entries
        for keyword in sorted(entry.keywords)
    ]


def find_duplicate_keywords(
    entries: Iterable[DestinationEntry]
) -> Dict[str, List[str]]:
    """
    Find keywords that belong to more than one destination folder.

    Args:
        entries: The indexed destination folders

    Returns:
        Dict mapping each shared keyword (sorted) to the folder paths that
        carry it, in index order. Empty if every keyword is unique.
    """
    groups: Dict[str, List[str]] = defaultdict(list)
    for occurrence in keyword_occurrences(entries):
        paths = groups[occurrence.keyword]
        if occurrence.destination_path not in paths:
            paths.append(occurrence.destination_path)

    return {
        keyword: paths
        for keyword, paths in sorted(groups.items())
        if len(paths) > 1
    }


class DestinationIndexer:
    """
    Indexes the destination folders directly under a target root.

    The index is built lazily on first access and is read-only afterwards.
    """

    def __init__(self, target_root: str, storage: Optional[Storage] = None):
        """
        Args:
            target_root: Directory whose immediate subfolders are destinations
            storage: Storage to list folders with (defaults to LocalStorage)
        """
        self.target_root = str(target_root)
        self.storage = storage if storage is not None else LocalStorage()
        self._entries: Optional[Dict[str, DestinationEntry]] = None

    def build_index(self) -> int:
        """
        Scan the target root and build the keyword index.

        Returns:
            Number of indexed destination folders

        Raises:
            OSError: If the target root cannot be listed
        """
        logger.info(f"Scanning target directories in: {self.target_root}")
        folder_paths = self.storage.list_subdirectories(self.target_root)
        self._entries = build_index(folder_paths)
        logger.info(
            f"Indexed {len(self._entries)} destination folders "
            f"({len(folder_paths) - len(self._entries)} without keywords)"
        )
        return len(self._entries)

    @property
    def entries(self) -> Dict[str, DestinationEntry]:
        """Get the index, building it if necessary."""
        if self._entries is None:
            self.build_index()
        return self._entries

    def find_duplicates(self) -> Dict[str, List[str]]:
        """Keywords shared by more than one destination folder."""
        return find_duplicate_keywords(self.entries.values())
