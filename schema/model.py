"""Schema model types: features, resolved units and the assembled model."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple


@dataclass(frozen=True, order=True)
class Feature:
    """A feature identifier qualified by the module that defines it."""

    module: str
    name: str

    @classmethod
    def parse(cls, text: str) -> "Feature":
        """
        Parse a ``module:feature`` identifier.

        Raises:
            ValueError: If either part is missing.
        """
        module, sep, name = text.strip().partition(":")
        if not sep or not module or not name or ":" in name:
            raise ValueError(f"invalid feature identifier '{text}', expected 'module:feature'")
        return cls(module, name)

    def __str__(self) -> str:
        return f"{self.module}:{self.name}"


class FeatureSet:
    """
    Immutable set of supported features.

    An empty set means no restriction: every feature is considered enabled.
    """

    def __init__(self, features: Iterable[Feature] = ()):
        self._features: FrozenSet[Feature] = frozenset(features)

    @classmethod
    def parse(cls, identifiers: Iterable[str]) -> "FeatureSet":
        """Build a feature set from ``module:feature`` strings."""
        return cls(Feature.parse(identifier) for identifier in identifiers)

    @property
    def modules(self) -> Set[str]:
        """Return the names of modules that have at least one selected feature."""
        return {feature.module for feature in self._features}

    def for_module(self, module: str) -> List[str]:
        """Return the selected feature names of one module, sorted."""
        return sorted(f.name for f in self._features if f.module == module)

    def __iter__(self) -> Iterator[Feature]:
        return iter(sorted(self._features))

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, feature: object) -> bool:
        return feature in self._features

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureSet):
            return NotImplemented
        return self._features == other._features

    def __hash__(self) -> int:
        return hash(self._features)

    def __repr__(self) -> str:
        return f"FeatureSet({[str(f) for f in self]})"


@dataclass(frozen=True)
class SchemaUnit:
    """
    One resolved top-level module or submodule.

    ``tested`` is derived after assembly; units straight from an engine
    always carry False.
    """

    name: str
    revision: Optional[str] = None
    kind: str = "module"
    source: Optional[Path] = None
    imports: Tuple[str, ...] = ()
    includes: Tuple[str, ...] = ()
    definitions: Tuple[str, ...] = ()
    tested: bool = False
    native: Any = field(default=None, repr=False, compare=False)

    def mark_tested(self) -> "SchemaUnit":
        """Return a copy of this unit flagged as under test."""
        return replace(self, tested=True)

    @property
    def dependencies(self) -> Tuple[str, ...]:
        """Names this unit imports or includes."""
        return self.imports + self.includes


class SchemaModel:
    """
    A fully resolved schema model.

    The model is built once from the units an engine produced and is never
    mutated afterwards; all accessors return copies or immutable values.
    """

    def __init__(self, units: Iterable[SchemaUnit] = (), native: Any = None):
        ordered = sorted(units, key=lambda u: (u.name, u.revision or ""))
        self._units: Tuple[SchemaUnit, ...] = tuple(ordered)
        self._by_name: Dict[str, List[SchemaUnit]] = {}
        for unit in self._units:
            self._by_name.setdefault(unit.name, []).append(unit)
        self._native = native

    @property
    def units(self) -> Tuple[SchemaUnit, ...]:
        """Return all units ordered by name and revision."""
        return self._units

    @property
    def names(self) -> List[str]:
        """Return the distinct unit names in model order."""
        return list(self._by_name)

    @property
    def native(self) -> Any:
        """Return the engine's own representation of the model, if any."""
        return self._native

    def get(self, name: str) -> Optional[SchemaUnit]:
        """Return the latest revision of the named unit, or None."""
        units = self._by_name.get(name)
        if not units:
            return None
        return units[-1]

    def get_all(self, name: str) -> List[SchemaUnit]:
        """Return every revision of the named unit."""
        return list(self._by_name.get(name, []))

    def get_importers(self, name: str) -> Set[str]:
        """Get the names of all units that import or include ``name``."""
        return {unit.name for unit in self._units if name in unit.dependencies}

    def get_dependencies(self, name: str) -> Set[str]:
        """
        Get every unit ``name`` depends on, directly or transitively.

        Dependencies that are not part of the model are still reported.
        """
        seen: Set[str] = set()
        pending = [name]
        while pending:
            current = pending.pop()
            unit = self.get(current)
            if unit is None:
                continue
            for dependency in unit.dependencies:
                if dependency not in seen and dependency != name:
                    seen.add(dependency)
                    pending.append(dependency)
        return seen

    def iter_imports(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all (unit, dependency) name pairs."""
        for unit in self._units:
            for dependency in sorted(set(unit.dependencies)):
                yield unit.name, dependency

    def __iter__(self) -> Iterator[SchemaUnit]:
        return iter(self._units)

    def __len__(self) -> int:
        """Return the number of units in the model."""
        return len(self._units)

    def __contains__(self, name: object) -> bool:
        """Check if a unit with this name is in the model."""
        return name in self._by_name

    def __repr__(self) -> str:
        edges = sum(len(set(u.dependencies)) for u in self._units)
        return f"SchemaModel(units={len(self._units)}, imports={edges})"
