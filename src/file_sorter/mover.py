"""
File mover for placing matched files into their destination folder.

This module is responsible for:
- Moving files through the storage layer and recording every success
- Catching and reporting move errors (permissions, long paths, etc.)
- Resolving name conflicts with _duplicate_001, _duplicate_002, ... suffixes
- Asking the operator how to handle a conflict, unless "rename all" is active
"""

import logging
import os
from typing import List

from .prompts import Prompter
from .storage import Storage
from .types import ConflictAction, MoveRecord, MoveStatus, SessionState
from .utils import describe_os_error

logger = logging.getLogger(__name__)

DUPLICATE_MARKER = "_duplicate_"


def resolve_duplicate_path(
    destination_dir: str,
    file_name: str,
    storage: Storage
) -> str:
    """
    Resolve a free "_duplicate_NNN" path for a file in destination_dir.

    The counter starts at 1 and every candidate is checked against the
    storage, so an existing chain (_001, _002, ...) is skipped rather
    than overwritten.

    Args:
        destination_dir: The folder the file is going into
        file_name: The file's original basename
        storage: Storage used for existence checks

    Returns:
        The full destination path, e.g. ".../Photo_duplicate_001.jpg"
    """
    stem, extension = os.path.splitext(file_name)
    counter = 1
    while True:
        candidate = os.path.join(
            destination_dir, f"{stem}{DUPLICATE_MARKER}{counter:03d}{extension}"
        )
        if not storage.exists(candidate):
            return candidate
        counter += 1

        # Safety limit to prevent infinite loops
        if counter > 100000:
            raise RuntimeError(
                f"Could not find unique name for '{file_name}' "
                f"in '{destination_dir}' after 100000 attempts"
            )


class FileMover:
    """
    Performs moves and keeps the log of completed ones.

    This is the only place where move failures are caught: a failed move
    is reported once and the file is left where it is.
    """

    def __init__(self, storage: Storage, prompter: Prompter):
        self.storage = storage
        self.prompter = prompter
        self._records: List[MoveRecord] = []

    @property
    def records(self) -> List[MoveRecord]:
        """Completed moves, in the order they happened."""
        return list(self._records)

    def move(self, source_path: str, destination_path: str, renamed: bool = False) -> MoveStatus:
        """
        Move one file and record the outcome.

        Args:
            source_path: The file to move
            destination_path: Where the file should end up
            renamed: Whether destination_path carries a duplicate suffix

        Returns:
            SUCCESS / SUCCESS_RENAMED, or ERROR if the move failed
        """
        try:
            logger.debug(f"Moving: {source_path} -> {destination_path}")
            self.storage.move(source_path, destination_path)
        except OSError as e:
            logger.debug(f"Failed to move {source_path}: {describe_os_error(e)}")
            self.prompter.log_move_failure(source_path, e)
            return MoveStatus.ERROR

        self._records.append(MoveRecord(source_path, destination_path, renamed))
        self.prompter.log_move(source_path, destination_path, renamed)
        return MoveStatus.SUCCESS_RENAMED if renamed else MoveStatus.SUCCESS


class ConflictResolver:
    """
    Places a file into a single destination folder.

    If a file with the same name is already there, the operator chooses
    between renaming, skipping, and renaming every conflict from now on.
    """

    def __init__(
        self,
        storage: Storage,
        prompter: Prompter,
        session: SessionState,
        mover: FileMover
    ):
        self.storage = storage
        self.prompter = prompter
        self.session = session
        self.mover = mover

    def place(self, source_path: str, destination_dir: str) -> MoveStatus:
        """
        Move source_path into destination_dir, resolving name conflicts.

        Args:
            source_path: The file to move
            destination_dir: The destination folder

        Returns:
            The MoveStatus for this file
        """
        file_name = os.path.basename(source_path)
        destination_path = os.path.join(destination_dir, file_name)

        if not self.storage.exists(destination_path):
            return self.mover.move(source_path, destination_path)

        logger.debug(f"Destination already exists: {destination_path}")

        if self.session.rename_all_conflicts:
            return self._rename_and_move(source_path, destination_dir)

        action = self.prompter.resolve_conflict(file_name, destination_dir)
        if action is ConflictAction.RENAME:
            return self._rename_and_move(source_path, destination_dir)
        if action is ConflictAction.SKIP:
            logger.debug(f"Skipped by operator: {source_path}")
            self.prompter.log_user_skip(source_path)
            return MoveStatus.SKIPPED_USER
        if action is ConflictAction.RENAME_ALL:
            self.session.enable_rename_all()
            logger.debug("Automatic renaming enabled for all remaining conflicts")
            self.prompter.log_permanent_choice(
                "Automatic renaming for all future conflicts is now ENABLED."
            )
            return self._rename_and_move(source_path, destination_dir)

        raise ValueError(f"Unknown conflict action: {action!r}")

    def _rename_and_move(self, source_path: str, destination_dir: str) -> MoveStatus:
        destination_path = resolve_duplicate_path(
            destination_dir, os.path.basename(source_path), self.storage
        )
        return self.mover.move(source_path, destination_path, renamed=True)
