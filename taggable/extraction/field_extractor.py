# ==============================================
# FieldExtractor
# ==============================================
#
# PURPOSE:
#   Pull raw tag candidates out of a record's taggable fields.
#   Candidates are NOT normalized here; TagNormalizer does that.
#
# DISPATCH (one handler per ValueShape):
# --------------------------------------
#   EMPTY       → nothing
#   REFERENCE   → nothing (ids of other records never become tags)
#   TAGGABLE    → value.tag(), then harvest value's tag field. A record
#                 already being tagged (reference cycle) is harvested
#                 as-is, without re-tagging.
#   MAP         → every string leaf, recursively; other leaves ignored
#   DATE        → strftime(date_format), e.g. "Saturday January 2000"
#   SCALAR      → value as-is
#   ARRAY       → primitive items as-is (nested lists flattened),
#                 records/maps recursively
#   UNSUPPORTED → nothing
#
#   Every candidate produced for a field goes through that field's
#   extractor (default: tokenizer.words); a custom extractor receives
#   a copy of the raw value and its result replaces the default.
#   Arrays mixing primitives with records/maps are the exception: the
#   extractor sees the primitives as one list, and each record/map
#   item is extracted on its own.
#
# CLASS: FieldExtractor
# ---------------------
#   - __init__(date_format: str = "%A %B %Y")
#   - extract(record, registry) -> list
#       Concatenate candidates from every registered field, in
#       registry order.
#   - extract_value(value, extractor=words, shapes=ALL_SHAPES) -> list
#       Candidates for one value. Shapes outside `shapes` yield nothing.
#
# ==============================================

import copy
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Set, Tuple

from ..config import DEFAULT_DATE_FORMAT
from ..normalization.tokenizer import words
from .value_shape import ALL_SHAPES, ShapeDetector, ValueShape


Extractor = Callable[[Any], Any]


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


class FieldExtractor:
    """Per-shape candidate extraction for taggable fields."""

    # ids of records whose extraction is running, shared by every extractor
    _in_progress: Set[int] = set()

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT):
        self.date_format = date_format
        self._handlers = {
            ValueShape.TAGGABLE: self._from_taggable,
            ValueShape.MAP: self._from_map,
            ValueShape.DATE: self._from_date,
            ValueShape.SCALAR: self._from_scalar,
            ValueShape.ARRAY: self._from_array,
        }

    def extract(self, record: Any, registry: Iterable[Any]) -> List[Any]:
        """
        Collect candidates from every registered taggable field of a record.

        Args:
            record: Record exposing get(path)
            registry: Iterable of TaggableField entries

        Returns:
            Flat list of raw candidates in registry order
        """
        candidates: List[Any] = []
        key = id(record)
        FieldExtractor._in_progress.add(key)
        try:
            for taggable_field in registry:
                value = record.get(taggable_field.path)
                candidates.extend(
                    self.extract_value(value, taggable_field.extractor, taggable_field.shapes)
                )
        finally:
            FieldExtractor._in_progress.discard(key)
        return candidates

    def extract_value(
        self,
        value: Any,
        extractor: Optional[Extractor] = None,
        shapes: FrozenSet[ValueShape] = ALL_SHAPES
    ) -> List[Any]:
        shape = ShapeDetector.detect(value)
        if shape not in shapes:
            return []
        handler = self._handlers.get(shape)
        if handler is None:
            return []
        return handler(value, extractor or words)

    def _apply(self, value: Any, extractor: Extractor) -> List[Any]:
        return _as_list(extractor(copy.copy(value)))

    def _from_taggable(self, instance: Any, extractor: Extractor) -> List[Any]:
        # Force the referenced record to compute its own canonical tags,
        # unless it is already being tagged further up (A -> B -> A)
        if id(instance) not in FieldExtractor._in_progress:
            instance.tag()
        path = getattr(type(instance), "TAGGABLE_PATH", "tags")
        getter = getattr(instance, "get", None)
        tags = getter(path) if callable(getter) else getattr(instance, path, None)
        return self._apply(list(tags or []), extractor)

    def _from_map(self, mapping: Any, extractor: Extractor) -> List[Any]:
        candidates: List[Any] = []
        for leaf in self._string_leaves(ShapeDetector.to_mapping(mapping)):
            candidates.extend(self._apply(leaf, extractor))
        return candidates

    def _string_leaves(self, value: Any) -> List[str]:
        if isinstance(value, str):
            return [value]
        if isinstance(value, dict):
            leaves: List[str] = []
            for nested in value.values():
                leaves.extend(self._string_leaves(nested))
            return leaves
        if isinstance(value, (list, tuple)):
            leaves = []
            for item in value:
                leaves.extend(self._string_leaves(item))
            return leaves
        return []

    def _from_date(self, value: Any, extractor: Extractor) -> List[Any]:
        return self._apply(ShapeDetector.format_date(value, self.date_format), extractor)

    def _from_scalar(self, value: Any, extractor: Extractor) -> List[Any]:
        return self._apply(value, extractor)

    def _from_array(self, items: Any, extractor: Extractor) -> List[Any]:
        primitives, nested = self._split_items(items)
        if not nested:
            # Plain (possibly nested) lists go to the extractor whole
            return self._apply(items, extractor)

        candidates = self._apply(primitives, extractor) if primitives else []
        # Arrays of sub-records, maps or dates
        for item in nested:
            candidates.extend(self.extract_value(item, extractor))
        return candidates

    def _split_items(self, items: Iterable[Any]) -> Tuple[List[Any], List[Any]]:
        primitives: List[Any] = []
        nested: List[Any] = []
        for item in items:
            shape = ShapeDetector.detect(item)
            if shape is ValueShape.ARRAY:
                inner_primitives, inner_nested = self._split_items(item)
                primitives.extend(inner_primitives)
                nested.extend(inner_nested)
            elif shape is ValueShape.SCALAR:
                primitives.append(item)
            elif shape is not ValueShape.EMPTY:
                nested.append(item)
        return primitives, nested
