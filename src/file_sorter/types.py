"""
Type definitions and data classes for the file sorter application.

This module defines:
- DestinationEntry: A destination folder and the keywords derived from its name
- KeywordOccurrence: A (keyword, folder) pair used for duplicate detection
- CandidateMatch: One keyword hit of a source file against a destination
- FileMatchResult: The best candidates found for a single source file
- ConflictAction / AmbiguityAction / AmbiguityChoice: Operator decisions
- SessionState: Sticky "for all" decisions taken during one run
- MoveStatus: Outcome of processing one matched file
- MoveRecord: A completed move, used for the final report
- SortSummary: Counters describing the outcome of a run
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class DestinationEntry:
    """
    A destination folder that files can be sorted into.

    Attributes:
        path: The full path to the folder (unique within an index)
        name: The folder's basename (e.g., "John Smith, Anna Lee")
        keywords: Match keywords derived from the name
    """
    path: str
    name: str
    keywords: FrozenSet[str] = frozenset()

    def __hash__(self):
        return hash(self.path)

    def __eq__(self, other):
        if not isinstance(other, DestinationEntry):
            return False
        return self.path == other.path


@dataclass(frozen=True)
class KeywordOccurrence:
    """A keyword and the destination folder it was derived from."""
    keyword: str
    destination_path: str


@dataclass(frozen=True)
class CandidateMatch:
    """A destination folder whose keyword was found in a file's stem."""
    destination_path: str
    keyword: str


@dataclass(frozen=True)
class FileMatchResult:
    """
    The most specific destinations found for a single source file.

    Holds at most one CandidateMatch per destination folder, all sharing
    the same (maximal) keyword length.
    """
    source_path: str
    candidates: Tuple[CandidateMatch, ...] = ()

    @property
    def best_candidates(self) -> FrozenSet[str]:
        return frozenset(c.destination_path for c in self.candidates)

    @property
    def is_match(self) -> bool:
        return bool(self.candidates)

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1


class ConflictAction(Enum):
    """Operator decision when the destination file already exists."""
    RENAME = "rename"          # Rename with a _duplicate_NNN suffix and move
    SKIP = "skip"              # Leave this file where it is
    RENAME_ALL = "rename_all"  # Rename this and every later conflict


class AmbiguityAction(Enum):
    """Operator decision when a file matches several destinations."""
    SELECT = "select"      # Move into the selected destination
    SKIP = "skip"          # Leave this file where it is
    SKIP_ALL = "skip_all"  # Leave this and every later ambiguous file


@dataclass(frozen=True)
class AmbiguityChoice:
    """An AmbiguityAction plus the chosen destination for SELECT."""
    action: AmbiguityAction
    selected_path: Optional[str] = None

    def __post_init__(self):
        if self.action is AmbiguityAction.SELECT and not self.selected_path:
            raise ValueError("SELECT requires a selected_path")

    @classmethod
    def select(cls, path: str) -> "AmbiguityChoice":
        return cls(AmbiguityAction.SELECT, path)

    @classmethod
    def skip(cls) -> "AmbiguityChoice":
        return cls(AmbiguityAction.SKIP)

    @classmethod
    def skip_all(cls) -> "AmbiguityChoice":
        return cls(AmbiguityAction.SKIP_ALL)


class SessionState:
    """
    Sticky decisions taken by the operator during a single run.

    Both flags start out False and can only ever be switched on.
    """

    def __init__(self):
        self._rename_all_conflicts = False
        self._skip_all_ambiguous = False

    @property
    def rename_all_conflicts(self) -> bool:
        return self._rename_all_conflicts

    @property
    def skip_all_ambiguous(self) -> bool:
        return self._skip_all_ambiguous

    def enable_rename_all(self) -> None:
        self._rename_all_conflicts = True

    def enable_skip_all(self) -> None:
        self._skip_all_ambiguous = True

    def __repr__(self):
        return (
            f"SessionState(rename_all_conflicts={self._rename_all_conflicts}, "
            f"skip_all_ambiguous={self._skip_all_ambiguous})"
        )


class MoveStatus(Enum):
    """Outcome of processing one matched file."""
    SUCCESS = "success"                  # Moved under its own name
    SUCCESS_RENAMED = "success_renamed"  # Moved with a _duplicate_NNN suffix
    SKIPPED_USER = "skipped_user"        # Operator chose to skip
    SKIPPED_AUTO = "skipped_auto"        # Skipped by a sticky "skip all"
    ERROR = "error"                      # Move failed, file left in place


@dataclass(frozen=True)
class MoveRecord:
    """A file that was moved, and where it ended up."""
    source_path: str
    destination_path: str
    renamed: bool = False


@dataclass
class SortSummary:
    """Outcome counters for one sorting run."""
    moved: int = 0
    renamed: int = 0
    skipped: int = 0
    auto_skipped: int = 0
    failed: int = 0
    unmatched: int = 0
    aborted: bool = False
    records: List[MoveRecord] = field(default_factory=list)
