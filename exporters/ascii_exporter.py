"""ASCII tree-style exporter for assembled schema models."""

from typing import Iterable, List, Optional, Set, Tuple

from schema.model import SchemaModel, SchemaUnit


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(
    model: SchemaModel,
    tested: Optional[Iterable[str]] = None,
    style: str = "tree",
    show_all: bool = False,
) -> str:
    """
    Render the import tree of a schema model.

    Each tree starts at a tested unit and lists what it imports or includes,
    recursively. Tested units are marked ``[tested]``, a unit repeated within
    its own branch is marked ``[*]`` and a dependency absent from the model
    is marked ``[MISSING]``.

    Args:
        model: The model to render.
        tested: Names of tested units. None or empty starts a tree at every unit.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        show_all: If True, also start a tree at every untested unit.

    Returns:
        ASCII tree string.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    tested_names: Set[str] = set(tested or ())

    if show_all or not tested_names:
        root_units = list(model)
    else:
        root_units = [unit for unit in model if unit.name in tested_names]

    lines: List[str] = []
    for i, unit in enumerate(root_units):
        _render_unit(
            model=model,
            name=unit.name,
            unit=unit,
            tested_names=tested_names,
            prefix="",
            is_last=True,
            chars=chars,
            visited=set(),
            lines=lines,
            is_root=True,
        )
        if i < len(root_units) - 1:
            lines.append("")

    return "\n".join(lines)


def _label(name: str, unit: Optional[SchemaUnit], tested_names: Set[str]) -> str:
    if unit is None:
        return f"{name} [MISSING]"
    label = name
    if unit.revision:
        label += f"@{unit.revision}"
    if unit.kind == "submodule":
        label += " (submodule)"
    if name in tested_names:
        label += " [tested]"
    return label


def _render_unit(
    model: SchemaModel,
    name: str,
    unit: Optional[SchemaUnit],
    tested_names: Set[str],
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    visited: Set[str],
    lines: List[str],
    is_root: bool = False,
) -> None:
    """
    Recursively render a unit and its dependencies.

    Args:
        model: The schema model.
        name: Name of the unit to render.
        unit: The unit, or None if it is not in the model.
        tested_names: Names of tested units.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        visited: Names on the current branch (to detect cycles).
        lines: Output lines list (modified in place).
        is_root: Whether this is a root-level unit.
    """
    branch, last, vertical, space = chars

    is_cycle = name in visited
    text = _label(name, unit, tested_names) + (" [*]" if is_cycle else "")

    if is_root:
        lines.append(text)
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{text}")

    if is_cycle or unit is None:
        return

    visited.add(name)

    children = sorted(set(unit.dependencies))
    if is_root:
        new_prefix = ""
    else:
        new_prefix = prefix + (space if is_last else vertical)

    for index, child in enumerate(children):
        _render_unit(
            model=model,
            name=child,
            unit=model.get(child),
            tested_names=tested_names,
            prefix=new_prefix,
            is_last=(index == len(children) - 1),
            chars=chars,
            visited=visited,
            lines=lines,
        )

    # Allow the same unit to appear again in other branches
    visited.discard(name)
