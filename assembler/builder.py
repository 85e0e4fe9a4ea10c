"""Orchestrates source classification, model assembly and tested-unit selection."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from schema.model import FeatureSet, SchemaModel, SchemaUnit
from scanner.classifier import SourceFile, SourceSet, classify_sources
from scanner.discovery import SCHEMA_EXTENSION
from scanner.parser import SourceDocument, read_source
from .engine import EngineFactory, SchemaEngine
from .errors import InvalidSourcePathError
from .selector import select_tested_units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssemblyResult:
    """
    Everything produced by one assembly request.

    Attributes:
        model: The resolved, read-only schema model.
        names: Module names declared by the primary sources, in input order.
        tested_units: Units of the model that came from primary sources.
        sources: The classification the model was built from.
    """

    model: SchemaModel
    names: List[str]
    tested_units: List[SchemaUnit]
    sources: SourceSet

    @property
    def tested_names(self) -> Set[str]:
        return {unit.name for unit in self.tested_units}


def default_engine_factory() -> SchemaEngine:
    """Create the pyang-backed engine."""
    # Imported here so the core does not require pyang unless it is used
    from .pyang_engine import PyangEngine

    return PyangEngine()


def _read_all(sources: Iterable[SourceFile]) -> List[SourceDocument]:
    return [read_source(source.path) for source in sources]


def assemble(
    primary: Sequence[SourceFile],
    supporting: Sequence[SourceFile],
    features: Optional[FeatureSet] = None,
    use_all_files: bool = False,
    engine_factory: Optional[EngineFactory] = None,
) -> Tuple[SchemaModel, List[str]]:
    """
    Build a schema model from classified sources.

    Primary sources are always added as full parse targets. A supporting
    source whose module name is already supplied by a primary source is
    dropped; the others are added as full parse targets when
    ``use_all_files`` is set, or only for import resolution otherwise.

    All documents are read, and every primary name is known, before the
    first source reaches the engine.

    Args:
        primary: Sources under test.
        supporting: Sources found in library roots.
        features: Supported features. None or empty means unrestricted.
        use_all_files: Validate supporting sources as top-level units too.
        engine_factory: Creates the engine for this request.

    Returns:
        (model, names) where names are the primary module names in order.

    Raises:
        SourceReadError: If any source cannot be read.
        AssemblyError: If the engine fails to build the model.
    """
    primary_docs = _read_all(primary)
    supporting_docs = _read_all(supporting)

    names: List[str] = []
    for doc in primary_docs:
        names.append(doc.name)
    covered = set(names)

    if engine_factory is None:
        engine_factory = default_engine_factory
    engine = engine_factory()

    if features:
        engine.set_supported_features(features)

    for doc in primary_docs:
        engine.add_source(doc)

    seen_paths: Set[Path] = {doc.path for doc in primary_docs}
    for doc in supporting_docs:
        if doc.name in covered:
            logger.debug("Skipping %s: module '%s' is supplied by a tested source", doc.path, doc.name)
            continue
        if doc.path in seen_paths:
            continue
        seen_paths.add(doc.path)
        if use_all_files:
            engine.add_source(doc)
        else:
            engine.add_library_source(doc)

    model = engine.build_model()
    logger.info("Built schema model with %d units", len(model))
    return model, names


def build_context(
    lib_dirs: Iterable[Union[str, Path]] = (),
    test_files: Iterable[Union[str, Path]] = (),
    features: Optional[FeatureSet] = None,
    recursive: bool = False,
    use_all_files: bool = False,
    strict_extensions: bool = False,
    require_tested_match: bool = False,
    engine_factory: Optional[EngineFactory] = None,
    extension: str = SCHEMA_EXTENSION,
) -> AssemblyResult:
    """
    Discover sources, build the model and select the tested units.

    Args:
        lib_dirs: Library root directories.
        test_files: Explicit source paths under test.
        features: Supported features. None or empty means unrestricted.
        recursive: Scan library roots recursively.
        use_all_files: Validate supporting sources as top-level units too.
        strict_extensions: Raise instead of ignoring explicit paths without
                           the schema extension.
        require_tested_match: Raise if a primary name has no resolved unit.
        engine_factory: Creates the engine for this request.
        extension: Schema source file extension.

    Returns:
        AssemblyResult for the request.
    """
    sources = classify_sources(lib_dirs, test_files, recursive=recursive, extension=extension)

    for path in sources.ignored:
        if strict_extensions:
            raise InvalidSourcePathError(path)
        logger.warning("Ignoring '%s': not a %s file", path, extension)

    model, names = assemble(
        sources.primary,
        sources.supporting,
        features=features,
        use_all_files=use_all_files,
        engine_factory=engine_factory,
    )
    tested = select_tested_units(model, names, strict=require_tested_match)

    return AssemblyResult(model=model, names=names, tested_units=tested, sources=sources)
