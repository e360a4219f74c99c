# ==============================================
# Schema (Field Declarations + Lifecycle Hooks)
# ==============================================
#
# PURPOSE:
#   Static description of a record type: its fields, per-field
#   metadata, lifecycle hooks, instance methods and statics.
#   Plugins (such as taggable) extend a Schema before a model
#   is built from it.
#
# ENUMS:
# ------
# - FieldKind(Enum): STRING, NUMBER, BOOLEAN, DATE, ARRAY, MAP,
#                    EMBEDDED, REFERENCE, MIXED
#
# CLASSES:
# --------
# - FieldSpec (dataclass)
#     name: str                 → Dotted path (e.g. "name.given")
#     kind: FieldKind           → Declared value kind
#     taggable: bool | callable → Contributes tags; callable = custom extractor
#     required: bool            → Checked by Document.validate()
#     ref: str | None           → Referenced model name (REFERENCE kind)
#     schema: Schema | None     → Sub-schema (EMBEDDED kind)
#     default: Any              → Default value (callables are called)
#     options: dict             → Storage hints (index, hide, searchable, ...)
#
# - Schema
#     Declarations are given as a mapping:
#       {"name": str}                                → STRING
#       {"dob": {"type": datetime, "taggable": True}}→ DATE, taggable
#       {"name": {"given": str, "surname": str}}     → paths name.given, name.surname
#       {"address": Schema({...})}                   → EMBEDDED sub-record
#       {"author": {"type": ObjectId, "ref": "User"}}→ REFERENCE
#
#   Methods:
#   --------
#   - add(fields: Mapping) -> Schema
#   - path(name) -> FieldSpec | None
#   - each_path() -> Iterator[(path, FieldSpec)]   (recurses into sub-schemas)
#   - pre(hook, fn) / hooks(hook)
#   - method(name, fn) / static(name, value)
#   - plugin(fn, **options) -> Schema
#
# ==============================================

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from bson import ObjectId


class FieldKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY = "array"
    MAP = "map"
    EMBEDDED = "embedded"
    REFERENCE = "reference"
    MIXED = "mixed"


# Python types accepted as shorthand for a FieldKind
PYTHON_TYPES = {
    str: FieldKind.STRING,
    int: FieldKind.NUMBER,
    float: FieldKind.NUMBER,
    bool: FieldKind.BOOLEAN,
    datetime: FieldKind.DATE,
    date: FieldKind.DATE,
    list: FieldKind.ARRAY,
    tuple: FieldKind.ARRAY,
    dict: FieldKind.MAP,
    ObjectId: FieldKind.REFERENCE,
    object: FieldKind.MIXED,
}

# Keys of a declaration dict that map onto FieldSpec attributes
SPEC_KEYS = ("taggable", "required", "ref", "default")


@dataclass
class FieldSpec:
    """Declaration of a single schema path."""

    name: str
    kind: FieldKind = FieldKind.MIXED
    taggable: Union[bool, Callable[[Any], Any]] = False
    required: bool = False
    ref: Optional[str] = None
    schema: Optional["Schema"] = None
    default: Any = None
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_taggable(self) -> bool:
        return bool(self.taggable)

    @property
    def extractor(self) -> Optional[Callable[[Any], Any]]:
        """Custom tag extractor, if the field declares one."""
        return self.taggable if callable(self.taggable) else None

    @classmethod
    def from_declaration(cls, name: str, declaration: Any) -> Optional["FieldSpec"]:
        """
        Build a FieldSpec from a schema declaration.

        Returns None when the declaration is a plain nested mapping
        (no "type" key), which the Schema expands into dotted paths.

        Raises:
            ValueError: If the declared type is not understood
        """
        if isinstance(declaration, FieldSpec):
            return replace(declaration, name=name)

        if isinstance(declaration, Mapping):
            if "type" not in declaration:
                return None
            options = dict(declaration)
            spec = cls._from_type(name, options.pop("type"))
            for key in SPEC_KEYS:
                if key in options:
                    setattr(spec, key, options.pop(key))
            spec.options = options
            return spec

        return cls._from_type(name, declaration)

    @classmethod
    def _from_type(cls, name: str, declared: Any) -> "FieldSpec":
        if isinstance(declared, FieldKind):
            return cls(name=name, kind=declared)
        if isinstance(declared, Schema):
            return cls(name=name, kind=FieldKind.EMBEDDED, schema=declared)
        # [str], [Schema(...)] → array
        if isinstance(declared, list):
            return cls(name=name, kind=FieldKind.ARRAY)
        if isinstance(declared, type) and declared in PYTHON_TYPES:
            return cls(name=name, kind=PYTHON_TYPES[declared])
        raise ValueError(f"Invalid type declared for path '{name}': {declared!r}")


class Schema:
    """
    Record type description shared by every model built from it.
    """

    def __init__(self, fields: Optional[Mapping[str, Any]] = None):
        self._paths: Dict[str, FieldSpec] = {}
        self._hooks: Dict[str, List[Callable[[Any], Any]]] = {}
        self.methods: Dict[str, Callable[..., Any]] = {}
        self.statics: Dict[str, Any] = {}
        if fields:
            self.add(fields)

    def add(self, fields: Mapping[str, Any], prefix: str = "") -> "Schema":
        """Declare (or redeclare) fields; nested mappings become dotted paths."""
        for name, declaration in fields.items():
            path = f"{prefix}{name}"
            spec = FieldSpec.from_declaration(path, declaration)
            if spec is None:
                self.add(declaration, prefix=f"{path}.")
            else:
                self._paths[path] = spec
        return self

    def path(self, name: str) -> Optional[FieldSpec]:
        return self._paths.get(name)

    @property
    def paths(self) -> Dict[str, FieldSpec]:
        return dict(self._paths)

    def each_path(self, prefix: str = "") -> Iterator[Tuple[str, FieldSpec]]:
        """Walk every declared path, descending into embedded sub-schemas."""
        for name, spec in self._paths.items():
            path = f"{prefix}{name}"
            yield path, spec
            if spec.kind is FieldKind.EMBEDDED and spec.schema is not None:
                yield from spec.schema.each_path(prefix=f"{path}.")

    def is_parent_path(self, name: str) -> bool:
        """True when `name` only exists as the prefix of nested paths."""
        return any(path.startswith(f"{name}.") for path in self._paths)

    # --- Lifecycle hooks ---

    def pre(self, hook: str, fn: Callable[[Any], Any]) -> "Schema":
        self._hooks.setdefault(hook, []).append(fn)
        return self

    def hooks(self, hook: str) -> List[Callable[[Any], Any]]:
        return list(self._hooks.get(hook, []))

    # --- Behaviour ---

    def method(self, name: str, fn: Callable[..., Any]) -> "Schema":
        self.methods[name] = fn
        return self

    def static(self, name: str, value: Any) -> "Schema":
        self.statics[name] = value
        return self

    def plugin(self, fn: Callable[..., Any], **options: Any) -> "Schema":
        fn(self, **options)
        return self
