# ==============================================
# Document (Record Instances)
# ==============================================
#
# PURPOSE:
#   A live record of some Schema: dict-backed field values with
#   dotted-path access, lifecycle hooks and serialization.
#
# CLASSES:
# --------
# - ValidationError(ValueError)
#     errors: dict[str, str]   → path -> message
#
# - Document
#     Base class of every model. Never used directly; build a
#     model class with model(name, schema).
#
#     Methods:
#     --------
#     - get(path, default=None) / set(path, value)
#     - run_hooks(hook)            → call schema.pre(hook) callbacks
#     - validate()                 → run "validate" hooks, check required paths
#     - to_mongo() -> dict         → full stored form (references as ids)
#     - to_dict(include_hidden=False) -> dict
#                                  → stored form minus paths declared hide=True
#
# FUNCTION:
# ---------
# - model(name, schema) -> type[Document]
#     Build a Document subclass carrying the schema's methods and statics.
#
# ==============================================

import copy
import weakref
from typing import Any, Dict, Mapping, Optional, Type

from bson import ObjectId

from ..extraction.value_shape import ShapeDetector
from .schema import FieldKind, FieldSpec, Schema


class ValidationError(ValueError):
    """Raised when a document fails validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = ", ".join(f"{path}: {message}" for path, message in self.errors.items())
        super().__init__(f"Validation failed: {details}")


# Models built implicitly for embedded sub-schemas
_embedded_models: "weakref.WeakKeyDictionary[Schema, Type[Document]]" = weakref.WeakKeyDictionary()


class Document:
    schema: Schema = Schema()
    model_name: str = "Document"

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **fields: Any):
        object.__setattr__(self, "_data", {})
        values = dict(data or {})
        values.update(fields)
        self._data["_id"] = values.pop("_id", None) or ObjectId()

        for path, spec in self.schema.paths.items():
            if spec.default is not None:
                default = spec.default() if callable(spec.default) else copy.deepcopy(spec.default)
                self.set(path, default)

        for name, value in values.items():
            self.set(name, value)

    @property
    def id(self) -> ObjectId:
        return self._data["_id"]

    # --- Field access ---

    def get(self, path: str, default: Any = None) -> Any:
        current: Any = self._data
        for part in path.split("."):
            if isinstance(current, Document):
                current = current._data
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current

    def set(self, path: str, value: Any) -> None:
        spec = self.schema.path(path)

        # {"name": {"given": ...}} assigned onto nested paths name.given, ...
        if spec is None and isinstance(value, Mapping) and self.schema.is_parent_path(path):
            for key, nested in value.items():
                self.set(f"{path}.{key}", nested)
            return

        if spec is not None:
            value = self._cast(spec, value)

        head, _, rest = path.partition(".")
        if not rest:
            self._data[head] = value
            return

        child = self._data.get(head)
        if isinstance(child, Document):
            child.set(rest, value)
            return
        if not isinstance(child, dict):
            child = {}
            self._data[head] = child
        parts = rest.split(".")
        for part in parts[:-1]:
            child = child.setdefault(part, {})
        child[parts[-1]] = value

    def _cast(self, spec: FieldSpec, value: Any) -> Any:
        if value is None:
            return None
        if spec.kind is FieldKind.DATE:
            return ShapeDetector.coerce_date(value)
        if spec.kind is FieldKind.EMBEDDED and spec.schema is not None:
            if isinstance(value, Mapping):
                return embedded_model(spec.schema)(value)
            return value
        if spec.kind is FieldKind.ARRAY and isinstance(value, (tuple, set, frozenset)):
            return list(value)
        return value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        schema = type(self).schema
        if schema.path(name) is not None or schema.is_parent_path(name) or name in self._data:
            return self.get(name)
        raise AttributeError(f"'{type(self).__name__}' has no field '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    # --- Lifecycle ---

    def run_hooks(self, hook: str) -> None:
        for fn in self.schema.hooks(hook):
            fn(self)

    def validate(self) -> None:
        """
        Run "validate" hooks, then check required paths.

        Raises:
            ValidationError: If a required path is missing or empty
        """
        self.run_hooks("validate")

        errors = {}
        for path, spec in self.schema.paths.items():
            if spec.required and self.get(path) in (None, "", []):
                errors[path] = "is required"
        if errors:
            raise ValidationError(errors)

    # --- Serialization ---

    def to_mongo(self) -> Dict[str, Any]:
        return {key: self._serialize(key, value) for key, value in self._data.items()}

    def _serialize(self, path: str, value: Any) -> Any:
        if isinstance(value, Document):
            spec = self.schema.path(path)
            if spec is not None and spec.kind is FieldKind.REFERENCE:
                return value.id
            return value.to_mongo()
        if isinstance(value, dict):
            return {key: self._serialize(f"{path}.{key}", nested) for key, nested in value.items()}
        if isinstance(value, list):
            return [self._serialize(path, item) for item in value]
        return copy.deepcopy(value)

    def to_dict(self, include_hidden: bool = False) -> Dict[str, Any]:
        data = self.to_mongo()
        if include_hidden:
            return data
        for path, spec in self.schema.paths.items():
            if spec.options.get("hide"):
                _drop_path(data, path)
        return data

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


def _drop_path(data: Dict[str, Any], path: str) -> None:
    parts = path.split(".")
    for part in parts[:-1]:
        data = data.get(part)
        if not isinstance(data, dict):
            return
    data.pop(parts[-1], None)


def model(name: str, schema: Schema, base: Type[Document] = Document) -> Type[Document]:
    """
    Build a model class from a schema.

    Apply plugins to the schema BEFORE calling this; methods and
    statics are copied onto the class at build time.

    Args:
        name: Model (class) name
        schema: Schema describing the records
        base: Document base class

    Returns:
        A Document subclass
    """
    namespace: Dict[str, Any] = {"schema": schema, "model_name": name}
    namespace.update(schema.methods)
    for key, value in schema.statics.items():
        namespace[key] = staticmethod(value) if callable(value) and not isinstance(value, type) else value
    return type(name, (base,), namespace)


def embedded_model(schema: Schema) -> Type[Document]:
    """Model used for dict values assigned to an embedded sub-schema."""
    cached = _embedded_models.get(schema)
    if cached is None:
        cached = model("EmbeddedDocument", schema)
        _embedded_models[schema] = cached
    return cached
