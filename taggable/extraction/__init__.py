# ==============================================
# TOPIC 2: EXTRACTION
# ==============================================
#
# This package finds the taggable fields of a schema and pulls
# raw tag candidates out of a live record.
#
# Modules:
# --------
# - value_shape.py     → Classify live values (date, map, reference, ...)
# - field_extractor.py → Per-shape candidate extraction
# - registry.py        → Taggable paths collected once per schema
#
# ==============================================

from .value_shape import ValueShape, ShapeDetector
from .field_extractor import FieldExtractor
from .registry import TaggableField, TaggableRegistry

__all__ = [
    "ValueShape",
    "ShapeDetector",
    "FieldExtractor",
    "TaggableField",
    "TaggableRegistry"
]
