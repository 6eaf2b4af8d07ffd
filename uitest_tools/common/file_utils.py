"""
File and path helpers used by the report tooling.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union


def read_file(file_path: Union[str, Path], encoding: str = "utf-8") -> Optional[str]:
    """
    Read a text file.

    Args:
        file_path: Path of the file to read
        encoding: File encoding, defaults to utf-8

    Returns:
        File content, or None when the file does not exist.
        Any other OS error is raised.
    """
    try:
        with open(file_path, "r", encoding=encoding) as f:
            return f.read()
    except FileNotFoundError:
        return None


def truncate_file_path(file_path: str, keyword: str) -> str:
    """
    Keep only the part of ``file_path`` after the last occurrence of ``keyword``.

    Examples:
        >>> truncate_file_path("C:\\\\proj\\\\tests\\\\login.test.ts", "\\\\")
        'login.test.ts'
        >>> truncate_file_path("/repo/testsuites/unit/test_a.py", "testsuites/")
        'unit/test_a.py'

    Raises:
        ValueError: If either argument is empty, or the keyword is not
            found in the path.
    """
    if not file_path or not keyword:
        raise ValueError("File path and keyword must be provided.")

    parts = file_path.split(keyword)
    if len(parts) == 1:
        raise ValueError("Keyword not found in the file path.")

    return parts[-1]


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create ``path`` (and parents) if missing and return it as a Path."""
    os.makedirs(path, exist_ok=True)
    return Path(path)


__all__ = [
    "read_file",
    "truncate_file_path",
    "ensure_directory",
]
