"""
Test doubles for the operator interface and storage.
"""

import os
from typing import Dict, List, Optional, Sequence

from file_sorter.types import AmbiguityChoice, CandidateMatch, ConflictAction, MoveRecord


class ScriptedPrompter:
    """
    Prompter that answers from scripted lists and records every call.

    Ambiguity answers may be an AmbiguityChoice or an int, meaning "select
    the candidate at this position of the presented order".
    """

    def __init__(
        self,
        confirm: bool = True,
        conflicts: Optional[List[ConflictAction]] = None,
        ambiguities: Optional[list] = None
    ):
        self.confirm = confirm
        self.conflict_answers = list(conflicts or [])
        self.ambiguity_answers = list(ambiguities or [])
        self.calls: List[tuple] = []
        self.presented: List[List[CandidateMatch]] = []
        self.report: Optional[List[MoveRecord]] = None

    def calls_to(self, method: str) -> List[tuple]:
        """Arguments of every recorded call to method."""
        return [call[1:] for call in self.calls if call[0] == method]

    def confirm_duplicates(self, groups: Dict[str, List[str]]) -> bool:
        self.calls.append(("confirm_duplicates", groups))
        return self.confirm

    def resolve_conflict(self, file_name: str, destination_dir: str) -> ConflictAction:
        self.calls.append(("resolve_conflict", file_name, destination_dir))
        assert self.conflict_answers, f"Unexpected conflict prompt for {file_name}"
        return self.conflict_answers.pop(0)

    def resolve_ambiguity(
        self,
        source_path: str,
        ordered_candidates: Sequence[CandidateMatch],
        root_dir: str
    ) -> AmbiguityChoice:
        self.calls.append(("resolve_ambiguity", source_path, root_dir))
        self.presented.append(list(ordered_candidates))
        assert self.ambiguity_answers, f"Unexpected ambiguity prompt for {source_path}"
        answer = self.ambiguity_answers.pop(0)
        if isinstance(answer, int):
            return AmbiguityChoice.select(ordered_candidates[answer].destination_path)
        return answer

    def log_move(self, source_path: str, destination_path: str, renamed: bool) -> None:
        self.calls.append(("log_move", source_path, destination_path, renamed))

    def log_move_failure(self, source_path: str, error: OSError) -> None:
        self.calls.append(("log_move_failure", source_path, error))

    def log_user_skip(self, source_path: str, permanent: bool = False) -> None:
        self.calls.append(("log_user_skip", source_path, permanent))

    def log_auto_skip(self, source_path: str) -> None:
        self.calls.append(("log_auto_skip", source_path))

    def log_permanent_choice(self, message: str) -> None:
        self.calls.append(("log_permanent_choice", message))

    def print_final_report(self, records: Sequence[MoveRecord]) -> None:
        self.calls.append(("print_final_report", list(records)))
        self.report = list(records)


class MemoryStorage:
    """
    In-memory storage: a set of directories and a dict of file contents.

    Paths listed in fail_moves raise PermissionError when moved.
    """

    def __init__(self, directories=(), files=None, fail_moves=()):
        self.directories = set(directories)
        self.files: Dict[str, str] = dict(files or {})
        self.fail_moves = set(fail_moves)
        self.moves: List[tuple] = []
        for path in self.files:
            self._add_parents(path)

    def _add_parents(self, path: str) -> None:
        parent = os.path.dirname(path)
        while parent and parent not in self.directories:
            self.directories.add(parent)
            parent = os.path.dirname(parent)

    def list_subdirectories(self, root: str) -> List[str]:
        if root not in self.directories:
            raise FileNotFoundError(root)
        return sorted(d for d in self.directories if os.path.dirname(d) == root)

    def list_files_recursively(self, root: str) -> List[str]:
        if root not in self.directories:
            raise FileNotFoundError(root)
        prefix = root.rstrip("/") + "/"
        return sorted(f for f in self.files if f.startswith(prefix))

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.directories

    def move(self, src: str, dst: str) -> None:
        if src in self.fail_moves:
            raise PermissionError(13, "Permission denied", src)
        if dst in self.files:
            raise FileExistsError(dst)
        self.files[dst] = self.files.pop(src)
        self.moves.append((src, dst))
