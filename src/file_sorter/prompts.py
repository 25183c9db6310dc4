"""
Operator prompts and notifications.

This module provides:
- Prompter: The interface the sorting engine uses to ask and report
- ConsolePrompter: A line-based console implementation

The engine never reads from or writes to the console itself, so it can be
driven by a scripted Prompter in tests.
"""

import os
import sys
from typing import Callable, Dict, List, Protocol, Sequence, TextIO

from .types import (
    AmbiguityChoice,
    CandidateMatch,
    ConflictAction,
    MoveRecord,
)
from .utils import describe_os_error, display_path


class Prompter(Protocol):
    """Decisions and notifications exchanged with the operator."""

    def confirm_duplicates(self, groups: Dict[str, List[str]]) -> bool:
        ...

    def resolve_conflict(self, file_name: str, destination_dir: str) -> ConflictAction:
        ...

    def resolve_ambiguity(
        self,
        source_path: str,
        ordered_candidates: Sequence[CandidateMatch],
        root_dir: str
    ) -> AmbiguityChoice:
        ...

    def log_move(self, source_path: str, destination_path: str, renamed: bool) -> None:
        ...

    def log_move_failure(self, source_path: str, error: OSError) -> None:
        ...

    def log_user_skip(self, source_path: str, permanent: bool = False) -> None:
        ...

    def log_auto_skip(self, source_path: str) -> None:
        ...

    def log_permanent_choice(self, message: str) -> None:
        ...

    def print_final_report(self, records: Sequence[MoveRecord]) -> None:
        ...


class ConsolePrompter:
    """
    Prompter that talks to the operator on the console.

    Invalid answers are reported and the question is asked again.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: TextIO = None
    ):
        """
        Args:
            input_func: Reads one line of operator input (default: input)
            output: Stream for prompts and notifications (default: stdout)
        """
        self._input = input_func
        self._output = output if output is not None else sys.stdout

    def _print(self, message: str = "") -> None:
        print(message, file=self._output)

    def _ask(self, prompt: str) -> str:
        self._output.flush()
        return (self._input(prompt) or "").strip().upper()

    def confirm_duplicates(self, groups: Dict[str, List[str]]) -> bool:
        self._print("\nWarning: The following name duplicates were found in target directories:")
        for keyword, paths in groups.items():
            self._print(f"\n- Name '{keyword}' appears in the following folders:")
            for path in paths:
                self._print(f"  - {path}")
        self._print("\nThis may lead to incorrect file placement during the process.")

        while True:
            answer = self._ask("Do you want to continue? (C = Continue, A = Abort): ")
            if answer == "C":
                return True
            if answer == "A":
                return False

    def resolve_conflict(self, file_name: str, destination_dir: str) -> ConflictAction:
        self._print(f"  - CONFLICT: A file named '{file_name}' already exists in '{destination_dir}'.")
        self._print("    Please choose an action:")
        self._print("    1: Rename and move (e.g., 'file_duplicate_001.txt')")
        self._print("    2: Skip this file")
        self._print("    3: Rename All - Automatically rename this and all future conflicts")

        actions = {
            "1": ConflictAction.RENAME,
            "2": ConflictAction.SKIP,
            "3": ConflictAction.RENAME_ALL,
        }
        while True:
            answer = self._ask("    Enter your choice (1-3): ")
            if answer in actions:
                return actions[answer]
            self._print("    Invalid choice. Please try again.")

    def resolve_ambiguity(
        self,
        source_path: str,
        ordered_candidates: Sequence[CandidateMatch],
        root_dir: str
    ) -> AmbiguityChoice:
        self._print(
            f"  - AMBIGUOUS: File '{os.path.basename(source_path)}' "
            f"matches multiple directories."
        )
        self._print("  Please choose a destination:")
        for number, candidate in enumerate(ordered_candidates, 1):
            self._print(f"    {number}: {display_path(candidate.destination_path, root_dir)}")
        self._print("    S: Skip this file")
        self._print("    A: Skip All - Skip this and all future ambiguous files")

        while True:
            answer = self._ask("  Enter your choice: ")
            if answer == "S":
                return AmbiguityChoice.skip()
            if answer == "A":
                return AmbiguityChoice.skip_all()
            if answer.isdigit() and 1 <= int(answer) <= len(ordered_candidates):
                return AmbiguityChoice.select(
                    ordered_candidates[int(answer) - 1].destination_path
                )
            self._print("  Invalid choice. Please try again.")

    def log_move(self, source_path: str, destination_path: str, renamed: bool) -> None:
        action = "MOVED & RENAMED" if renamed else "MOVED"
        self._print(
            f"  - {action}: '{os.path.basename(source_path)}' to "
            f"'{os.path.basename(destination_path)}' in '{os.path.dirname(destination_path)}'"
        )

    def log_move_failure(self, source_path: str, error: OSError) -> None:
        self._print(
            f"  - FAILED to move '{os.path.basename(source_path)}'. "
            f"Reason: {describe_os_error(error)}"
        )

    def log_user_skip(self, source_path: str, permanent: bool = False) -> None:
        reason = "User chose to skip all" if permanent else "User chose not to move"
        self._print(f"  - SKIPPED: {reason} '{os.path.basename(source_path)}'.")

    def log_auto_skip(self, source_path: str) -> None:
        self._print(f"  - SKIPPED (auto): File '{os.path.basename(source_path)}' is ambiguous.")

    def log_permanent_choice(self, message: str) -> None:
        self._print(f"    -> {message}")

    def print_final_report(self, records: Sequence[MoveRecord]) -> None:
        self._print("\n--- File Moving Report ---")
        if not records:
            self._print("No files were moved.")
            return
        self._print(f"{len(records)} file(s) were moved:")
        for record in records:
            self._print(
                f"  - MOVED: '{os.path.basename(record.source_path)}' "
                f"to '{record.destination_path}'"
            )
