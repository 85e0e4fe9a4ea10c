"""File discovery utilities for locating schema sources."""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Set, Union

logger = logging.getLogger(__name__)

SCHEMA_EXTENSION = ".yang"


def is_schema_file_name(name: str, extension: str = SCHEMA_EXTENSION) -> bool:
    """Check whether a file name carries the schema extension (case-insensitive)."""
    return name.lower().endswith(extension.lower())


def iter_schema_files(
    root: Union[str, Path],
    recursive: bool = False,
    extension: str = SCHEMA_EXTENSION,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over schema source files below a directory.

    Directories that cannot be listed (missing, not a directory, permission
    denied, broken links) contribute no files; the scan never fails because
    of them. Symlinked directories already visited are skipped.

    Args:
        root: Directory to scan.
        recursive: If True, descend into subdirectories depth-first.
        extension: File extension to match, case-insensitively.
        max_depth: Maximum depth to descend when recursive. None means
                   unlimited; 0 is the same as a non-recursive scan.

    Yields:
        Path objects for matching files, directory by directory in sorted order.
    """
    root = Path(root)
    if not recursive:
        max_depth = 0

    stack: List[tuple] = [(root, 0)]
    visited: Set[str] = set()

    while stack:
        current, depth = stack.pop()

        try:
            real = os.path.realpath(current)
            if real in visited:
                continue
            visited.add(real)
            entries = sorted(current.iterdir())
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", current, e)
            continue

        subdirs: List[Path] = []
        for entry in entries:
            try:
                if entry.is_dir():
                    subdirs.append(entry)
                elif entry.is_file() and is_schema_file_name(entry.name, extension):
                    yield entry
            except OSError as e:
                logger.debug("Skipping unreadable entry %s: %s", entry, e)

        if max_depth is not None and depth >= max_depth:
            continue

        # Reverse so the first subdirectory is popped first
        for subdir in reversed(subdirs):
            stack.append((subdir, depth + 1))


def list_schema_files(
    root: Union[str, Path],
    recursive: bool = False,
    extension: str = SCHEMA_EXTENSION,
) -> List[Path]:
    """Return the schema files found under ``root`` as a list."""
    return list(iter_schema_files(root, recursive=recursive, extension=extension))
