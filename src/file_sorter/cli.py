"""
Command-line interface for the file sorter.

Usage:
    file-sorter TARGET SOURCE [--workers N] [--report PATH] [--verbose]
                              [--log-file PATH]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import SortConfig
from .engine import SortingEngine
from .prompts import ConsolePrompter
from .report import write_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-sorter",
        description=(
            "Sort files into existing folders whose names appear in the file "
            "names. Folder names may list several names separated by ', '."
        ),
    )
    parser.add_argument(
        "target_dir",
        type=Path,
        help="Directory containing the destination folders",
    )
    parser.add_argument(
        "source_dir",
        type=Path,
        help="Directory tree containing the files to sort",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        metavar="N",
        help="Number of threads used to match files (default: automatic)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write the list of moved files to PATH (.xlsx or .csv)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Also write log messages to PATH",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Configure the root logger.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Optional file that receives the same messages
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_config(argv: Optional[List[str]] = None) -> SortConfig:
    args = build_parser().parse_args(argv)
    return SortConfig(
        target_dir=args.target_dir,
        source_dir=args.source_dir,
        max_workers=args.workers,
        report_path=args.report,
        verbose=args.verbose,
        log_file=args.log_file,
    )


def main(argv: Optional[List[str]] = None, prompter=None) -> int:
    """
    Run the file sorter.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        prompter: Operator interface (defaults to ConsolePrompter)

    Returns:
        Process exit code: 0 on success or operator abort, 1 on error
    """
    config = parse_config(argv)

    try:
        config.validate()
        setup_logging(config.verbose, config.log_file)
    except (OSError, ValueError) as e:
        setup_logging(config.verbose)
        logger.error(f"Error: {e}")
        return 1

    engine = SortingEngine(
        target_dir=str(config.target_dir),
        source_dir=str(config.source_dir),
        prompter=prompter if prompter is not None else ConsolePrompter(),
        max_workers=config.max_workers,
    )

    try:
        summary = engine.run()
    except OSError as e:
        logger.error(f"Cannot read directories: {e}")
        return 1
    except Exception as e:
        logger.exception(f"An unexpected error occurred: {e}")
        return 1

    if summary.aborted:
        return 0

    if config.report_path is not None:
        try:
            write_report(summary.records, config.report_path)
        except OSError as e:
            logger.error(f"Failed to write report: {e}")
            return 1

    return 0
