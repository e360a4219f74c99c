import copy
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

from bson import ObjectId


class ValueShape(Enum):
    """
    Closed set of value shapes a taggable field can hold.

    - EMPTY: None, "" or an empty collection
    - REFERENCE: an unresolved id of another record
    - TAGGABLE: a record that derives its own tags (exposes tag())
    - MAP: a dictionary or an embedded record without tag()
    - DATE: a date or datetime
    - SCALAR: a string or number
    - ARRAY: a list/tuple of values
    - UNSUPPORTED: anything else (booleans, arbitrary objects)
    """
    EMPTY = "empty"
    REFERENCE = "reference"
    TAGGABLE = "taggable"
    MAP = "map"
    DATE = "date"
    SCALAR = "scalar"
    ARRAY = "array"
    UNSUPPORTED = "unsupported"


ALL_SHAPES = frozenset(ValueShape)


class ShapeDetector:
    DATETIME_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%fZ",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d",
        "%d/%m/%Y",
        "%m/%d/%Y",
        "%Y/%m/%d",
        "%d-%m-%Y",
        "%m-%d-%Y",
    ]

    @classmethod
    def detect(cls, value: Any) -> ValueShape:
        if value is None:
            return ValueShape.EMPTY

        if isinstance(value, bool):
            return ValueShape.UNSUPPORTED

        if isinstance(value, ObjectId):
            return ValueShape.REFERENCE

        if callable(getattr(value, "tag", None)):
            return ValueShape.TAGGABLE

        if isinstance(value, Mapping) or callable(getattr(value, "to_mongo", None)):
            return ValueShape.MAP if cls.to_mapping(value) else ValueShape.EMPTY

        # datetime is a subclass of date
        if isinstance(value, date):
            return ValueShape.DATE

        if isinstance(value, str):
            return ValueShape.SCALAR if value else ValueShape.EMPTY

        if isinstance(value, (int, float)):
            return ValueShape.SCALAR

        if isinstance(value, (list, tuple)):
            return ValueShape.ARRAY if value else ValueShape.EMPTY

        return ValueShape.UNSUPPORTED

    @classmethod
    def to_mapping(cls, value: Any) -> dict:
        """Plain dict copy of a mapping or an embedded record."""
        if isinstance(value, Mapping):
            return copy.deepcopy(dict(value))
        mapping = dict(value.to_mongo())
        mapping.pop("_id", None)
        return mapping

    @classmethod
    def format_date(cls, value: date, date_format: str) -> str:
        return value.strftime(date_format)

    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        """Parse date strings; anything unparseable is returned unchanged."""
        if isinstance(value, str):
            parsed = cls.parse_datetime(value.strip())
            return parsed if parsed is not None else value
        return value

    @classmethod
    def parse_datetime(cls, value: str) -> Optional[datetime]:
        for fmt in cls.DATETIME_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        return None
