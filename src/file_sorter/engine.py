"""
Sorting engine: drives a complete sorting run.

A run goes through these steps:
1. Index the destination folders under the target root
2. Ask the operator to confirm if any keyword belongs to several folders
3. Enumerate the source files and match them in parallel
4. Process the matches one at a time, in enumeration order:
   single match -> conflict resolution, several -> ambiguity resolution
5. Print the final report of moved files

All prompts, sticky decisions and moves happen on the calling thread.
"""

import logging
from typing import List, Optional

from .indexer import DestinationIndexer
from .matcher import match_files
from .mover import ConflictResolver, FileMover
from .prompts import Prompter
from .resolver import AmbiguityResolver
from .storage import LocalStorage, Storage
from .types import FileMatchResult, MoveRecord, MoveStatus, SessionState, SortSummary

logger = logging.getLogger(__name__)


class SortingEngine:
    """
    Sorts files from a source tree into the destination folders of a
    target root.

    Session decisions ("rename all", "skip all") and the move log are reset
    at the start of every run().
    """

    def __init__(
        self,
        target_dir: str,
        source_dir: str,
        prompter: Prompter,
        storage: Optional[Storage] = None,
        max_workers: Optional[int] = None
    ):
        """
        Args:
            target_dir: Directory whose subfolders are the destinations
            source_dir: Directory tree holding the files to sort
            prompter: Operator interface for decisions and notifications
            storage: Filesystem access (defaults to LocalStorage)
            max_workers: Thread pool size for the matching phase
        """
        self.target_dir = str(target_dir)
        self.source_dir = str(source_dir)
        self.prompter = prompter
        self.storage = storage if storage is not None else LocalStorage()
        self.max_workers = max_workers

        self.indexer = DestinationIndexer(self.target_dir, self.storage)
        self._start_session()

    def _start_session(self) -> None:
        # Sticky decisions and the move log never carry over between runs
        self.session = SessionState()
        self.mover = FileMover(self.storage, self.prompter)
        self.conflict_resolver = ConflictResolver(
            self.storage, self.prompter, self.session, self.mover
        )
        self.ambiguity_resolver = AmbiguityResolver(
            self.prompter, self.session, self.conflict_resolver, self.target_dir
        )

    @property
    def move_records(self) -> List[MoveRecord]:
        return self.mover.records

    def run(self) -> SortSummary:
        """
        Execute the whole sorting run.

        Returns:
            SortSummary with counters and the list of completed moves.
            `aborted` is True if the operator declined to continue after
            duplicate keywords were reported; nothing is moved in that case.

        Raises:
            OSError: If the target or source directory cannot be enumerated
        """
        summary = SortSummary()
        self._start_session()

        self.indexer.build_index()
        if not self._confirm_duplicates():
            logger.warning("Operation aborted by user.")
            summary.aborted = True
            return summary

        logger.info(f"Scanning source files in: {self.source_dir}")
        source_files = self.storage.list_files_recursively(self.source_dir)
        logger.info(f"Found {len(source_files)} files to process. Analyzing matches...")

        results = match_files(
            source_files, self.indexer.entries.values(), self.max_workers
        )
        matched = [result for result in results if result.is_match]
        summary.unmatched = len(results) - len(matched)
        logger.info(f"Found {len(matched)} files with potential matches.")

        self._process_matches(matched, summary)

        summary.records = self.move_records
        self.prompter.print_final_report(summary.records)
        logger.info(
            f"Sorting complete: {summary.moved} moved ({summary.renamed} renamed), "
            f"{summary.skipped + summary.auto_skipped} skipped, {summary.failed} failed, "
            f"{summary.unmatched} unmatched"
        )
        return summary

    def _confirm_duplicates(self) -> bool:
        duplicates = self.indexer.find_duplicates()
        if not duplicates:
            return True
        logger.warning(
            f"{len(duplicates)} keyword(s) are shared by more than one destination folder"
        )
        return self.prompter.confirm_duplicates(duplicates)

    def _process_matches(self, matches: List[FileMatchResult], summary: SortSummary) -> None:
        total = len(matches)
        for i, result in enumerate(matches):
            status = self.process_match(result)
            self._tally(summary, status)

            # Log progress every 100 files
            if (i + 1) % 100 == 0:
                logger.info(f"Processed {i + 1}/{total} files...")

    def process_match(self, result: FileMatchResult) -> MoveStatus:
        """
        Dispatch a single non-empty match result.

        Args:
            result: A FileMatchResult with at least one candidate

        Returns:
            The MoveStatus for the file
        """
        if not result.is_match:
            raise ValueError(f"No candidates for {result.source_path}")

        if result.is_ambiguous:
            logger.debug(
                f"Ambiguous: {result.source_path} -> {sorted(result.best_candidates)}"
            )
            return self.ambiguity_resolver.resolve(result)

        destination_dir = result.candidates[0].destination_path
        logger.debug(f"Single match: {result.source_path} -> {destination_dir}")
        return self.conflict_resolver.place(result.source_path, destination_dir)

    @staticmethod
    def _tally(summary: SortSummary, status: MoveStatus) -> None:
        if status in (MoveStatus.SUCCESS, MoveStatus.SUCCESS_RENAMED):
            summary.moved += 1
            if status is MoveStatus.SUCCESS_RENAMED:
                summary.renamed += 1
        elif status is MoveStatus.SKIPPED_USER:
            summary.skipped += 1
        elif status is MoveStatus.SKIPPED_AUTO:
            summary.auto_skipped += 1
        elif status is MoveStatus.ERROR:
            summary.failed += 1
