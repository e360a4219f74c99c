# ==============================================
# TaggableRegistry
# ==============================================
#
# PURPOSE:
#   Scan a schema ONCE, when the taggable plugin is attached, and
#   record which paths contribute tags and how their values are
#   extracted.
#
# WHY THIS CLASS EXISTS:
#   Field discovery should not happen on every tag() call. The
#   registry freezes, per path:
#     - the extractor (custom callable or tokenizer.words)
#     - the value shapes the declared FieldKind may hold
#   so FieldExtractor only has to match the live value against
#   that closed set.
#
# CLASSES:
# --------
# - TaggableField (frozen dataclass)
#     path, kind, extractor, custom, shapes
#
# - TaggableRegistry
#     - collect(schema, tags_path="tags") -> TaggableRegistry  (classmethod)
#     - get(path) -> TaggableField | None
#     - paths -> list[str]
#     - as_mapping() -> MappingProxy {path: extractor}
#
# ==============================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional

from ..normalization.tokenizer import words
from ..storage.schema import FieldKind, Schema
from .value_shape import ALL_SHAPES, ValueShape


# Live value shapes each declared kind may produce candidates from
SHAPES_BY_KIND: Dict[FieldKind, FrozenSet[ValueShape]] = {
    FieldKind.STRING: frozenset({ValueShape.SCALAR}),
    FieldKind.NUMBER: frozenset({ValueShape.SCALAR}),
    FieldKind.BOOLEAN: frozenset(),
    FieldKind.DATE: frozenset({ValueShape.DATE}),
    FieldKind.ARRAY: frozenset({ValueShape.ARRAY, ValueShape.SCALAR}),
    FieldKind.MAP: frozenset({ValueShape.MAP}),
    FieldKind.EMBEDDED: frozenset({ValueShape.TAGGABLE, ValueShape.MAP}),
    FieldKind.REFERENCE: frozenset({ValueShape.TAGGABLE}),
    FieldKind.MIXED: ALL_SHAPES - {ValueShape.REFERENCE},
}


@dataclass(frozen=True)
class TaggableField:
    """A schema path that contributes tag candidates."""
    path: str
    kind: FieldKind
    extractor: Callable[[Any], Any]
    custom: bool = False
    shapes: FrozenSet[ValueShape] = ALL_SHAPES


class TaggableRegistry:
    """Immutable, ordered collection of taggable paths."""

    def __init__(self, fields: Iterable[TaggableField] = ()):
        self._fields: Dict[str, TaggableField] = {f.path: f for f in fields}

    @classmethod
    def collect(cls, schema: Schema, tags_path: str = "tags") -> "TaggableRegistry":
        """
        Collect every taggable path of a schema, sub-schemas included.

        Args:
            schema: Schema to scan
            tags_path: Path where tags are stored; never collected

        Returns:
            TaggableRegistry in declaration order
        """
        fields: List[TaggableField] = []
        for path, spec in schema.each_path():
            if not spec.is_taggable or path == tags_path:
                continue
            extractor = spec.extractor
            fields.append(TaggableField(
                path=path,
                kind=spec.kind,
                extractor=extractor or words,
                custom=extractor is not None,
                shapes=SHAPES_BY_KIND[spec.kind]
            ))
        return cls(fields)

    def get(self, path: str) -> Optional[TaggableField]:
        return self._fields.get(path)

    @property
    def paths(self) -> List[str]:
        return list(self._fields)

    def as_mapping(self) -> Mapping[str, Callable[[Any], Any]]:
        return MappingProxyType({path: f.extractor for path, f in self._fields.items()})

    def __iter__(self) -> Iterator[TaggableField]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, path: object) -> bool:
        return path in self._fields
