"""
Ambiguity resolution for files matching several destination folders.

Candidates are presented in a fixed order: full-name matches (keywords
containing a space) first, then shorter folder names, then by path. The
order only affects presentation; the operator always makes the choice.
"""

import logging
import os
from typing import Iterable, List

from .mover import ConflictResolver
from .prompts import Prompter
from .types import (
    AmbiguityAction,
    CandidateMatch,
    FileMatchResult,
    MoveStatus,
    SessionState,
)

logger = logging.getLogger(__name__)


def order_candidates(candidates: Iterable[CandidateMatch]) -> List[CandidateMatch]:
    """Sort candidates into presentation order."""
    return sorted(
        candidates,
        key=lambda c: (
            " " not in c.keyword,
            len(os.path.basename(c.destination_path)),
            c.destination_path,
        ),
    )


class AmbiguityResolver:
    """Lets the operator pick one of several equally good destinations."""

    def __init__(
        self,
        prompter: Prompter,
        session: SessionState,
        conflict_resolver: ConflictResolver,
        root_dir: str
    ):
        self.prompter = prompter
        self.session = session
        self.conflict_resolver = conflict_resolver
        self.root_dir = root_dir

    def resolve(self, result: FileMatchResult) -> MoveStatus:
        """
        Resolve an ambiguous match and move the file if a folder is chosen.

        Once the operator has chosen "skip all", every later ambiguous file
        is skipped without asking.

        Args:
            result: A match with two or more candidates

        Returns:
            The MoveStatus for this file
        """
        source_path = result.source_path

        if self.session.skip_all_ambiguous:
            logger.debug(f"Auto-skipped ambiguous file: {source_path}")
            self.prompter.log_auto_skip(source_path)
            return MoveStatus.SKIPPED_AUTO

        ordered = order_candidates(result.candidates)
        choice = self.prompter.resolve_ambiguity(source_path, ordered, self.root_dir)

        if choice.action is AmbiguityAction.SELECT:
            if choice.selected_path not in result.best_candidates:
                raise ValueError(
                    f"Selected path is not a candidate for {source_path}: "
                    f"{choice.selected_path}"
                )
            return self.conflict_resolver.place(source_path, choice.selected_path)
        if choice.action is AmbiguityAction.SKIP:
            logger.debug(f"Skipped by operator: {source_path}")
            self.prompter.log_user_skip(source_path)
            return MoveStatus.SKIPPED_USER
        if choice.action is AmbiguityAction.SKIP_ALL:
            self.session.enable_skip_all()
            logger.debug("Skipping all remaining ambiguous files")
            self.prompter.log_user_skip(source_path, permanent=True)
            return MoveStatus.SKIPPED_USER

        raise ValueError(f"Unknown ambiguity action: {choice.action!r}")
