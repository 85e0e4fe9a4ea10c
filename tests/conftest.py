"""Shared fixtures: a recording schema engine and YANG source trees."""

import re
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from assembler.engine import SchemaEngine
from assembler.errors import AssemblyError
from schema.model import FeatureSet, SchemaModel, SchemaUnit
from scanner.parser import SourceDocument


_IMPORT_RE = re.compile(r"\b(import|include)\s+([\w.\-]+)")
_CONTAINER_RE = re.compile(r"\bcontainer\s+([\w.\-]+)")


class RecordingEngine(SchemaEngine):
    """
    Engine double that records every call.

    The model holds a unit for every full parse target, plus every library
    document reachable through import/include statements.
    """

    def __init__(self, errors: Optional[List[str]] = None):
        self.calls: List[Tuple[str, object]] = []
        self.sources: List[SourceDocument] = []
        self.library: List[SourceDocument] = []
        self.features: Optional[FeatureSet] = None
        self.errors = errors or []

    def set_supported_features(self, features: FeatureSet) -> None:
        assert not self.sources and not self.library, "features set after sources"
        self.features = features
        self.calls.append(("features", features))

    def add_source(self, document: SourceDocument) -> None:
        self.sources.append(document)
        self.calls.append(("source", document.name))

    def add_library_source(self, document: SourceDocument) -> None:
        self.library.append(document)
        self.calls.append(("library", document.name))

    def build_model(self) -> SchemaModel:
        self.calls.append(("build", None))
        if self.errors:
            raise AssemblyError(self.errors)

        library = {doc.name: doc for doc in self.library}
        chosen = {doc.name: doc for doc in self.sources}
        pending = list(chosen.values())
        while pending:
            doc = pending.pop()
            for _, name in _IMPORT_RE.findall(doc.text):
                if name not in chosen and name in library:
                    chosen[name] = library[name]
                    pending.append(library[name])

        return SchemaModel(_unit(doc) for doc in chosen.values())


def _unit(doc: SourceDocument) -> SchemaUnit:
    deps = _IMPORT_RE.findall(doc.text)
    return SchemaUnit(
        name=doc.name,
        revision=doc.revision,
        kind=doc.kind or "module",
        source=doc.path,
        imports=tuple(n for k, n in deps if k == "import"),
        includes=tuple(n for k, n in deps if k == "include"),
        definitions=tuple(f"container {c}" for c in _CONTAINER_RE.findall(doc.text)),
    )


class EngineFactory:
    """Factory handing out RecordingEngines and remembering them."""

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = errors
        self.engines: List[RecordingEngine] = []

    def __call__(self) -> RecordingEngine:
        engine = RecordingEngine(self.errors)
        self.engines.append(engine)
        return engine

    @property
    def last(self) -> RecordingEngine:
        return self.engines[-1]


def write_module(
    directory: Path,
    file_name: str,
    module: str,
    imports: Tuple[str, ...] = (),
    container: Optional[str] = None,
    revision: Optional[str] = None,
) -> Path:
    """Write a small YANG module and return its path."""
    lines = [f"module {module} {{", '  yang-version 1.1;',
             f'  namespace "urn:test:{module}";', f"  prefix {module.replace('-', '_')};"]
    for name in imports:
        lines.append(f"  import {name} {{ prefix {name.replace('-', '_')}; }}")
    if revision:
        lines.append(f"  revision {revision};")
    if container:
        lines.append(f"  container {container};")
    lines.append("}")
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / file_name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def engine_factory():
    """A factory of recording engines."""
    return EngineFactory()


@pytest.fixture
def write_yang():
    """The write_module helper."""
    return write_module
