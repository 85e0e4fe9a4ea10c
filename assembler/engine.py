"""Capability interface the assembler expects from a schema engine."""

from abc import ABC, abstractmethod
from typing import Callable

from schema.model import FeatureSet, SchemaModel
from scanner.parser import SourceDocument


class SchemaEngine(ABC):
    """
    A schema parsing and resolution engine.

    One instance serves one assembly request. Features, when restricted,
    are installed before the first source is added.
    """

    @abstractmethod
    def set_supported_features(self, features: FeatureSet) -> None:
        """Restrict conditional constructs to the given features."""

    @abstractmethod
    def add_source(self, document: SourceDocument) -> None:
        """Add a document to be fully parsed and validated."""

    @abstractmethod
    def add_library_source(self, document: SourceDocument) -> None:
        """Add a document used only to resolve imports and includes."""

    @abstractmethod
    def build_model(self) -> SchemaModel:
        """
        Resolve every added source into a model.

        Raises:
            AssemblyError: If the engine reports any error.
        """


EngineFactory = Callable[[], SchemaEngine]
