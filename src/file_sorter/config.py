"""
Run configuration for the file sorter.

There is no configuration file: every setting comes from the command line
and lives only for the duration of one run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class SortConfig:
    """Settings for one sorting run."""
    target_dir: Path
    source_dir: Path
    max_workers: Optional[int] = None
    report_path: Optional[Path] = None
    verbose: bool = False
    log_file: Optional[Path] = None

    def validate(self) -> None:
        """
        Check the settings before anything is touched.

        Raises:
            FileNotFoundError: If a directory, or the parent of the report or
                log file, is missing
            NotADirectoryError: If a directory path is not a directory
            ValueError: If max_workers is less than 1
        """
        for label, path in (("Target", self.target_dir), ("Source", self.source_dir)):
            if not path.exists():
                raise FileNotFoundError(f"{label} directory not found at path '{path}'.")
            if not path.is_dir():
                raise NotADirectoryError(f"{label} path is not a directory: '{path}'.")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

        if self.report_path is not None and not self.report_path.parent.exists():
            raise FileNotFoundError(
                f"Report directory not found: '{self.report_path.parent}'."
            )

        if self.log_file is not None and not self.log_file.parent.exists():
            raise FileNotFoundError(
                f"Log file directory not found: '{self.log_file.parent}'."
            )
