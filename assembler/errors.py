"""Exception hierarchy for schema assembly.

Everything raised on purpose by the assembler derives from
AssemblerError so callers can catch a single type. Problems met while
scanning directories are not represented here: the scanner absorbs them.
"""

from pathlib import Path
from typing import Iterable, List, Optional


class AssemblerError(Exception):
    """Base class for all assembler errors."""


class ConfigError(AssemblerError):
    """Raised when a configuration file cannot be read or is invalid."""


class SourceReadError(AssemblerError):
    """Raised when a schema source document cannot be opened or decoded."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read '{path}': {reason}")


class InvalidSourcePathError(AssemblerError):
    """Raised in strict mode for an explicit path lacking the source extension."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"'{path}' is not a schema source file")


class AssemblyError(AssemblerError):
    """
    Raised when the schema engine fails to build a resolved model.

    Attributes:
        messages: Every error reported by the engine, in report order.
    """

    def __init__(self, messages: Iterable[str], summary: Optional[str] = None):
        self.messages: List[str] = list(messages)
        if summary is None:
            summary = "schema model could not be built"
        if self.messages:
            detail = "\n  ".join(self.messages)
            super().__init__(f"{summary}:\n  {detail}")
        else:
            super().__init__(summary)


class UnmatchedSourceError(AssemblerError):
    """Raised in strict mode when tested names have no resolved unit."""

    def __init__(self, names: Iterable[str]):
        self.names = sorted(names)
        super().__init__("no resolved unit for tested source(s): " + ", ".join(self.names))
