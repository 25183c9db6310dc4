"""
File matcher for assigning source files to destination folders.

A file matches a destination when one of the destination's keywords occurs
in the file's stem (case-insensitive). Only the longest matching keywords
count: "Document for John Smith" goes to "John Smith", not to "John".

find_best_matches() is a pure function of the index and the file name, so
match_files() can fan it out over a thread pool.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence

from .types import CandidateMatch, DestinationEntry, FileMatchResult

logger = logging.getLogger(__name__)


def file_stem(path: str) -> str:
    """Base name of a path without its extension."""
    return os.path.splitext(os.path.basename(path))[0]


def _representative_keyword(keywords: Iterable[str]) -> str:
    # Prefer a full-name keyword ("John Smith") over its stripped variant
    return min(keywords, key=lambda keyword: (" " not in keyword, keyword))


def find_best_matches(
    source_path: str,
    entries: Iterable[DestinationEntry]
) -> FileMatchResult:
    """
    Find the most specific destination folders for a single file.

    Collects every keyword of every destination found in the file's stem,
    keeps only the hits with the maximum keyword length and reduces them
    to one candidate per destination. Ties between destinations are kept.

    Args:
        source_path: Path of the file to match
        entries: The indexed destination folders

    Returns:
        FileMatchResult, with no candidates if nothing matched
    """
    stem = file_stem(source_path).lower()

    hits: Dict[str, List[str]] = {}
    max_len = 0
    for entry in entries:
        for keyword in entry.keywords:
            if keyword.lower() in stem:
                hits.setdefault(entry.path, []).append(keyword)
                max_len = max(max_len, len(keyword))

    if not hits:
        return FileMatchResult(source_path=source_path)

    candidates = []
    for path, keywords in hits.items():
        best = [keyword for keyword in keywords if len(keyword) == max_len]
        if best:
            candidates.append(
                CandidateMatch(destination_path=path, keyword=_representative_keyword(best))
            )

    return FileMatchResult(source_path=source_path, candidates=tuple(candidates))


def match_files(
    source_paths: Sequence[str],
    entries: Iterable[DestinationEntry],
    max_workers: Optional[int] = None
) -> List[FileMatchResult]:
    """
    Match every source file against the index.

    Results are returned in the order of source_paths regardless of the
    order in which workers finish.

    Args:
        source_paths: Files to match, in enumeration order
        entries: The indexed destination folders
        max_workers: Thread pool size (None for the executor default,
                     1 to match inline)

    Returns:
        One FileMatchResult per source path, including non-matches
    """
    entries = tuple(entries)

    def _match(path: str) -> FileMatchResult:
        return find_best_matches(path, entries)

    if max_workers == 1 or len(source_paths) <= 1:
        return [_match(path) for path in source_paths]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(_match, source_paths))

    logger.debug(f"Matched {len(results)} files using a thread pool")
    return results
