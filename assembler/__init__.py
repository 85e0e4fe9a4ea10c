"""Schema model assembly: engine interface, builder and tested-unit selection.

Only the error types are re-exported here; import ``assembler.builder``,
``assembler.selector`` or ``assembler.pyang_engine`` directly.
"""

from .errors import (
    AssemblerError,
    AssemblyError,
    ConfigError,
    InvalidSourcePathError,
    SourceReadError,
    UnmatchedSourceError,
)

__all__ = [
    "AssemblerError",
    "AssemblyError",
    "ConfigError",
    "InvalidSourcePathError",
    "SourceReadError",
    "UnmatchedSourceError",
]
