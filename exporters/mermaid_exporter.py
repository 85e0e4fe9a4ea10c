"""Mermaid flowchart exporter for schema import graphs."""

import re
from typing import Dict, Iterable, List, Optional, Set

from schema.model import SchemaModel


TESTED_CLASS_DEF = "    classDef tested stroke:#2e7d32,stroke-width:2px"
MISSING_STYLE = "stroke:#ff0000,stroke-dasharray: 5 5"


def to_mermaid(
    model: SchemaModel,
    tested: Optional[Iterable[str]] = None,
    orientation: str = "LR",
    group_by_role: bool = False,
) -> str:
    """
    Convert a schema model's import graph to a Mermaid flowchart.

    Args:
        model: The model to export.
        tested: Names of tested units; they get the ``tested`` class.
        orientation: Flowchart orientation (LR, TD, TB, RL, BT).
        group_by_role: If True, put tested and supporting units in
                       separate subgraphs.

    Returns:
        Mermaid flowchart string.
    """
    tested_names: Set[str] = set(tested or ())
    lines = [f"flowchart {orientation}"]

    node_ids: Dict[str, str] = {name: _sanitize_id(name) for name in model.names}

    missing_ids: Dict[str, str] = {}
    for _, dependency in model.iter_imports():
        if dependency not in node_ids and dependency not in missing_ids:
            missing_ids[dependency] = _sanitize_id(f"missing_{dependency}")

    if group_by_role:
        groups = [
            ("tested", "Tested", [n for n in model.names if n in tested_names]),
            ("supporting", "Supporting", [n for n in model.names if n not in tested_names]),
        ]
        for group_id, title, names in groups:
            if not names:
                continue
            lines.append(f"    subgraph {group_id}[{title}]")
            for name in names:
                lines.append(f'        {node_ids[name]}["{name}"]')
            lines.append("    end")
    else:
        for name in model.names:
            lines.append(f'    {node_ids[name]}["{name}"]')

    if missing_ids:
        lines.append("")
        lines.append("    %% Missing dependencies")
        for name in sorted(missing_ids):
            lines.append(f'    {missing_ids[name]}["{name} [MISSING]"]')
            lines.append(f"    style {missing_ids[name]} {MISSING_STYLE}")

    edges: List[str] = []
    for source, dependency in model.iter_imports():
        target_id = node_ids.get(dependency) or missing_ids[dependency]
        arrow = "-->" if dependency in node_ids else "-.->"
        edges.append(f"    {node_ids[source]} {arrow} {target_id}")
    if edges:
        lines.append("")
        lines.extend(edges)

    marked = [node_ids[name] for name in model.names if name in tested_names]
    if marked:
        lines.append("")
        lines.append(TESTED_CLASS_DEF)
        lines.append(f"    class {','.join(marked)} tested")

    return "\n".join(lines)


def _sanitize_id(value: str) -> str:
    """
    Convert a unit name to a valid Mermaid node ID.

    Mermaid IDs can only contain letters, digits, and underscores.
    """
    sanitized = re.sub(r"[/\\.\-:]", "_", value)
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    return sanitized or "unknown"
