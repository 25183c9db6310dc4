r"""
Path and error helpers for the file sorter.

This module provides:
- to_extended_length_path(): Convert to \\?\ form for Windows API calls
- display_path(): Path relative to a root, for operator-facing messages
- describe_os_error(): Readable message for common move failures
"""

import os
import sys
from pathlib import Path
from typing import Union

# Windows extended-length path prefixes
EXTENDED_PATH_PREFIX = "\\\\?\\"
EXTENDED_UNC_PREFIX = "\\\\?\\UNC\\"
UNC_PREFIX = "\\\\"


def to_extended_length_path(path: Union[str, Path]) -> str:
    r"""
    Convert a path to Windows extended-length form (\\?\ prefix).

    Extended-length paths allow the Windows API to handle paths longer than
    MAX_PATH (260 characters). Returns the path unchanged on other platforms
    or when it is already in extended form.

    Examples:
        >>> to_extended_length_path("C:\\Users\\test")  # Windows
        '\\\\?\\C:\\Users\\test'
        >>> to_extended_length_path("\\\\server\\share")  # Windows UNC
        '\\\\?\\UNC\\server\\share'
    """
    path_str = str(path)
    if sys.platform != "win32" or path_str.startswith(EXTENDED_PATH_PREFIX):
        return path_str

    if path_str.startswith(UNC_PREFIX):
        return EXTENDED_UNC_PREFIX + path_str[2:]

    return EXTENDED_PATH_PREFIX + os.path.abspath(path_str)


def display_path(path: Union[str, Path], root: Union[str, Path]) -> str:
    """
    Render path relative to root, falling back to the full path.

    Args:
        path: The path to display
        root: The directory the path is expected to live under

    Returns:
        The relative path, or the path unchanged if it is not under root
    """
    try:
        return os.path.relpath(path, root)
    except ValueError:
        # Different drives on Windows
        return str(path)


def describe_os_error(e: OSError) -> str:
    """
    Format an OSError with a hint for the failures seen most often.

    Args:
        e: The exception to format

    Returns:
        Formatted error string
    """
    error_code = getattr(e, "winerror", None)
    message = f"[WinError {error_code}] {e}" if error_code is not None else str(e)

    if isinstance(e, FileExistsError):
        return f"Destination already exists: {message}"
    if isinstance(e, PermissionError) or error_code == 5:
        return f"Permission denied: {message}"
    if error_code == 32:
        return f"File is locked or in use: {message}"
    if error_code == 206 or "name too long" in message.lower():
        return f"Path too long: {message}"
    return message
