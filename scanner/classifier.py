"""Partitioning schema sources into primary (tested) and supporting sets."""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Set, Union

from .discovery import SCHEMA_EXTENSION, iter_schema_files

logger = logging.getLogger(__name__)


class SourceRole(Enum):
    """Role assigned to a source file at classification time."""

    PRIMARY = "primary"
    SUPPORTING = "supporting"


@dataclass(frozen=True)
class SourceFile:
    """A schema source path and its role. Identity is the path."""

    path: Path
    role: SourceRole = field(compare=False)

    @property
    def is_primary(self) -> bool:
        return self.role is SourceRole.PRIMARY


@dataclass(frozen=True)
class SourceSet:
    """
    The outcome of classification.

    Attributes:
        primary: Explicit test sources, in the order given.
        supporting: Sources found by scanning library roots, one per path.
        lib_dirs: The library roots that were scanned, including the
                  parent directories of primary sources.
        ignored: Explicit paths skipped because they lack the schema extension.
    """

    primary: List[SourceFile]
    supporting: List[SourceFile]
    lib_dirs: List[str]
    ignored: List[str] = field(default_factory=list)


def _dir_key(directory: str) -> str:
    return os.path.normcase(os.path.abspath(directory))


def classify_sources(
    lib_dirs: Iterable[Union[str, Path]],
    test_files: Iterable[Union[str, Path]],
    recursive: bool = False,
    extension: str = SCHEMA_EXTENSION,
) -> SourceSet:
    """
    Classify explicit test files and scanned library files.

    Every explicit path ending in ``extension`` becomes a primary source and
    its parent directory is added to the library roots, so the test
    source's own imports can be found without listing that directory.
    Other explicit paths are ignored and reported in ``SourceSet.ignored``.
    Each distinct root is scanned once; every file found is supporting.

    Args:
        lib_dirs: Library root directories.
        test_files: Explicit source paths to be tested.
        recursive: If True, scan library roots recursively.
        extension: Schema source file extension.

    Returns:
        SourceSet with disjoint role assignments per file.
    """
    primary: List[SourceFile] = []
    ignored: List[str] = []
    roots: List[str] = []
    seen_roots: Set[str] = set()

    def add_root(directory: str) -> None:
        key = _dir_key(directory)
        if key not in seen_roots:
            seen_roots.add(key)
            roots.append(directory)

    derived: List[str] = []
    for test_file in test_files:
        text = str(test_file)
        if not text.endswith(extension):
            ignored.append(text)
            continue
        path = Path(text)
        primary.append(SourceFile(path, SourceRole.PRIMARY))
        derived.append(str(path.parent))

    for directory in derived:
        add_root(directory)
    for directory in lib_dirs:
        add_root(str(directory))

    supporting: List[SourceFile] = []
    seen_files: Set[str] = set()
    for root in roots:
        for path in iter_schema_files(root, recursive=recursive, extension=extension):
            key = _dir_key(str(path))
            if key in seen_files:
                continue
            seen_files.add(key)
            supporting.append(SourceFile(path, SourceRole.SUPPORTING))

    logger.debug(
        "Classified %d primary and %d supporting sources from %d roots",
        len(primary), len(supporting), len(roots),
    )
    return SourceSet(primary=primary, supporting=supporting, lib_dirs=roots, ignored=ignored)
