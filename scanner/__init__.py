"""Scanner module for schema source discovery and classification."""

from .discovery import iter_schema_files, list_schema_files, SCHEMA_EXTENSION
from .classifier import classify_sources, SourceFile, SourceRole, SourceSet
from .parser import read_source, SourceDocument

__all__ = [
    "iter_schema_files",
    "list_schema_files",
    "SCHEMA_EXTENSION",
    "classify_sources",
    "SourceFile",
    "SourceRole",
    "SourceSet",
    "read_source",
    "SourceDocument",
]
