"""Schema model types shared by the assembler and the exporters."""

from .model import Feature, FeatureSet, SchemaUnit, SchemaModel

__all__ = [
    "Feature",
    "FeatureSet",
    "SchemaUnit",
    "SchemaModel",
]
