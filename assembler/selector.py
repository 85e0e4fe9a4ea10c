"""Selecting the model units that came from sources under test."""

import logging
from typing import Iterable, List

from schema.model import SchemaModel, SchemaUnit
from .errors import UnmatchedSourceError

logger = logging.getLogger(__name__)


def select_tested_units(
    model: SchemaModel,
    names: Iterable[str],
    strict: bool = False,
) -> List[SchemaUnit]:
    """
    Return the units of ``model`` whose name matches a tested source name.

    Units are returned in model order, each flagged ``tested``. A name with
    no matching unit is logged and dropped, unless ``strict`` is set.

    Raises:
        UnmatchedSourceError: In strict mode, if any name has no unit.
    """
    wanted = set(names)
    tested = [unit.mark_tested() for unit in model if unit.name in wanted]

    unmatched = wanted - {unit.name for unit in tested}
    if unmatched:
        if strict:
            raise UnmatchedSourceError(unmatched)
        for name in sorted(unmatched):
            logger.warning("No resolved unit for tested source '%s'", name)

    return tested


def tag_units(model: SchemaModel, names: Iterable[str]) -> List[SchemaUnit]:
    """Return every unit of ``model`` with its ``tested`` flag derived from ``names``."""
    wanted = set(names)
    return [unit.mark_tested() if unit.name in wanted else unit for unit in model]
