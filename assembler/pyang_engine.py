"""Schema engine backed by the pyang YANG library."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from pyang import context, error, repository

from schema.model import FeatureSet, SchemaModel, SchemaUnit
from scanner.parser import SourceDocument
from .engine import SchemaEngine
from .errors import AssemblyError

logger = logging.getLogger(__name__)

# Top-level statements that define schema content
DEFINITION_KEYWORDS = {
    "container", "leaf", "leaf-list", "list", "choice",
    "anydata", "anyxml", "uses", "augment",
    "rpc", "action", "notification",
    "grouping", "typedef", "identity", "feature",
}


class DocumentRepository(repository.Repository):
    """A pyang repository serving a fixed list of in-memory documents."""

    def __init__(self, documents: List[SourceDocument]):
        super().__init__()
        self._documents = list(documents)

    def get_modules_and_revisions(self, ctx):
        # Revisions are left to pyang, which reads them from the parsed text
        return [
            (doc.name, None, ("document", index))
            for index, doc in enumerate(self._documents)
        ]

    def get_module_from_handle(self, handle):
        doc = self._documents[handle[1]]
        return str(doc.path), "yang", doc.text


class PyangEngine(SchemaEngine):
    """
    Adapter from the SchemaEngine interface to a pyang Context.

    Documents are collected until build_model(); the pyang context is created
    then, because its repository must be complete when the context starts.
    Every document, primary or library, is visible to import resolution.
    """

    def __init__(self):
        self._features: Optional[FeatureSet] = None
        self._sources: List[SourceDocument] = []
        self._library: List[SourceDocument] = []

    def set_supported_features(self, features: FeatureSet) -> None:
        if self._sources or self._library:
            raise RuntimeError("features must be set before sources are added")
        self._features = features

    def add_source(self, document: SourceDocument) -> None:
        self._sources.append(document)

    def add_library_source(self, document: SourceDocument) -> None:
        self._library.append(document)

    def build_model(self) -> SchemaModel:
        repo = DocumentRepository(self._sources + self._library)
        ctx = context.Context(repo)

        if self._features:
            # Modules absent from ctx.features keep every feature enabled,
            # so list every known module explicitly.
            names = {doc.name for doc in self._sources + self._library}
            names |= self._features.modules
            ctx.features = {name: self._features.for_module(name) for name in names}

        for doc in self._sources:
            logger.debug("Parsing %s (%s)", doc.path, doc.name)
            ctx.add_module(str(doc.path), doc.text, "yang")

        ctx.validate()

        messages = _collect_errors(ctx)
        if messages:
            raise AssemblyError(messages)

        # Drop nodes disabled by if-feature
        for stmt in ctx.modules.values():
            stmt.prune()

        units = [_to_unit(key, stmt) for key, stmt in ctx.modules.items()]
        return SchemaModel(units, native=ctx)


def _collect_errors(ctx) -> List[str]:
    """Format the error-level entries pyang recorded, skipping warnings."""
    messages: List[str] = []
    for epos, etag, eargs in ctx.errors:
        if not error.is_error(error.err_level(etag)):
            continue
        messages.append(f"{epos}: {error.err_to_str(etag, eargs)}")
    return messages


def _to_unit(key: Tuple[str, Optional[str]], stmt) -> SchemaUnit:
    name, revision = key
    if revision == "unknown":
        revision = None

    source: Optional[Path] = None
    ref = getattr(stmt.pos, "ref", None)
    if ref:
        source = Path(ref)

    definitions: List[str] = []
    for sub in stmt.substmts:
        if getattr(sub, "i_not_implemented", False):
            continue
        if sub.keyword in DEFINITION_KEYWORDS:
            definitions.append(f"{sub.keyword} {sub.arg}")

    return SchemaUnit(
        name=name,
        revision=revision,
        kind=stmt.keyword,
        source=source,
        imports=tuple(s.arg for s in stmt.search("import")),
        includes=tuple(s.arg for s in stmt.search("include")),
        definitions=tuple(definitions),
        native=stmt,
    )
