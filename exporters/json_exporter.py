"""JSON exporter for assembled schema models (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from assembler.selector import tag_units
from schema.model import SchemaModel


def to_json(
    model: SchemaModel,
    tested: Optional[Iterable[str]] = None,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a schema model to JSON.

    Args:
        model: The model to export.
        tested: Names of tested units.
        base: Optional base path; source paths are shown relative to it.
        indent: JSON indentation level.

    Returns:
        JSON string with a ``units`` list and the sorted ``tested`` names.
    """
    tested_names = sorted(set(tested or ()))

    units: List[Dict[str, Any]] = []
    for unit in tag_units(model, tested_names):
        units.append({
            "name": unit.name,
            "revision": unit.revision,
            "kind": unit.kind,
            "source": _get_path_str(unit.source, base),
            "tested": unit.tested,
            "imports": list(unit.imports),
            "includes": list(unit.includes),
            "definitions": list(unit.definitions),
        })

    data: Dict[str, Any] = {
        "units": units,
        "tested": [name for name in tested_names if name in model],
    }

    return json.dumps(data, indent=indent)


def _get_path_str(path: Optional[Path], base: Optional[Path]) -> Optional[str]:
    """Get the string representation of a path."""
    if path is None:
        return None
    if base is not None:
        try:
            return str(path.resolve().relative_to(base.resolve())).replace("\\", "/")
        except ValueError:
            pass
    return str(path).replace("\\", "/")
