"""
File Sorter - A CLI tool for sorting loose files into name-tagged folders.

This package provides functionality to:
- Index destination folders by the names in their folder names
  (several names separated by ", ")
- Match files to folders by checking if file names contain those names,
  preferring the longest (most specific) match
- Ask the operator to resolve ambiguous matches and name conflicts,
  with "rename all" / "skip all" decisions for the rest of the run
- Move files and report what was moved (console, CSV or XLSX)
"""

__version__ = "0.1.0"
__author__ = "File Sorter Team"
