# ==============================================
# Taggable Plugin + Orchestrator
# ==============================================
#
# PURPOSE:
#   Attach automatic keyword tags to a Schema. This is the entry
#   point users interact with; everything else is internal.
#
# HOW IT CONNECTS THE TOPICS:
#
#   taggable(schema, ...)          (once, before model())
#     ├─ adds the tag path         (storage/schema.py)
#     ├─ TaggableRegistry.collect  (extraction/registry.py)
#     ├─ installs tag() / untag()  (instance methods)
#     └─ schema.pre(hook, tag)     (auto-tagging before persistence)
#
#   document.tag(*tags)
#     1. existing tags ([] when fresh=True)
#     2. + explicit tags
#     3. + FieldExtractor.extract(document, registry)
#     4. TagNormalizer.remove_blacklist(..., config + option blacklist)
#     5. TagNormalizer.normalize(...)   (tokenize, stopwords, dedupe)
#     6. overwrite the tag path
#
#   document.untag(*tags)
#     current tags minus normalize(*tags, remove_stopwords=False)
#
# CLASSES:
# --------
# - TaggableOptions (frozen dataclass)
#     path="tags", blacklist=(), fresh=False, hook="validate",
#     index=True, duplicate=False, searchable=True,
#     exportable=False, hide=True
#
# - Tagger
#     Runs tag/untag for one record type.
#
# FUNCTION:
# ---------
# - taggable(schema, options=None, config=None, **overrides) -> Tagger
#
# USAGE:
# ------
#   schema = Schema({"name": {"type": str, "taggable": True}})
#   schema.plugin(taggable, blacklist=["js"])
#   User = model("User", schema)
#   user = User(name="John Boe")
#   user.tag("nodejs")      # ["nodejs", "john", "boe"]
#
# ==============================================

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .config import TaggableConfig, get_config
from .extraction.field_extractor import FieldExtractor
from .extraction.registry import TaggableRegistry
from .normalization.stopwords import StopwordCorpus
from .normalization.tag_normalizer import TagNormalizer
from .storage.schema import Schema


@dataclass(frozen=True)
class TaggableOptions:
    """Per-schema plugin options."""

    path: str = "tags"
    blacklist: Tuple[str, ...] = ()
    fresh: bool = False
    hook: str = "validate"

    # --- Storage hints, forwarded verbatim to the tag path ---
    index: Union[bool, str] = True
    duplicate: bool = False
    searchable: bool = True
    exportable: bool = False
    hide: bool = True

    @classmethod
    def build(cls, options: Union["TaggableOptions", Mapping[str, Any], None] = None, **overrides: Any) -> "TaggableOptions":
        """
        Merge defaults, an options object/mapping and keyword overrides.

        Raises:
            ValueError: On unknown option names
        """
        merged: Dict[str, Any] = asdict(options) if isinstance(options, TaggableOptions) else dict(options or {})
        merged.update(overrides)

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(merged) - known)
        if unknown:
            raise ValueError(f"Unknown taggable options: {', '.join(unknown)}")

        blacklist = merged.get("blacklist") or ()
        merged["blacklist"] = (blacklist,) if isinstance(blacklist, str) else tuple(blacklist)
        return cls(**merged)

    def storage_hints(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "duplicate": self.duplicate,
            "searchable": self.searchable,
            "exportable": self.exportable,
            "hide": self.hide,
        }


class Tagger:
    """
    Tag derivation for one record type.

    Holds only read-only state (registry, options, blacklist); every
    call reads and writes the record it is given and nothing else.
    """

    def __init__(
        self,
        registry: TaggableRegistry,
        options: TaggableOptions,
        config: TaggableConfig,
        normalizer: Optional[TagNormalizer] = None,
        extractor: Optional[FieldExtractor] = None
    ):
        self.registry = registry
        self.options = options
        self.blacklist: Tuple[str, ...] = (*config.blacklist, *options.blacklist)
        self.normalizer = normalizer or TagNormalizer(StopwordCorpus(config.stopword_languages))
        self.extractor = extractor or FieldExtractor(config.date_format)

    @property
    def path(self) -> str:
        return self.options.path

    def tag(self, record: Any, *tags: Any) -> List[str]:
        """
        Recompute a record's tags from explicit tags and its taggable fields.

        Args:
            record: Document to tag
            *tags: Extra tags/phrases to add

        Returns:
            The canonical tags now stored on the record
        """
        existing = [] if self.options.fresh else list(record.get(self.path) or [])
        candidates = [*existing, *tags, *self.extractor.extract(record, self.registry)]

        allowed = self.normalizer.remove_blacklist(candidates, self.blacklist)
        normalized = self.normalizer.normalize(*allowed)

        record.set(self.path, normalized)
        return normalized

    def untag(self, record: Any, *tags: Any) -> List[str]:
        """
        Remove tags from a record. Not subject to blacklist/stopwords.

        Returns:
            The tags left on the record
        """
        removed = set(self.normalizer.normalize(*tags, remove_stopwords=False))
        remaining = [tag for tag in record.get(self.path) or [] if tag not in removed]

        record.set(self.path, remaining)
        return remaining


def taggable(
    schema: Schema,
    options: Union[TaggableOptions, Mapping[str, Any], None] = None,
    config: Optional[TaggableConfig] = None,
    **overrides: Any
) -> Tagger:
    """
    Schema plugin adding a tag path and taggable behaviour.

    Args:
        schema: Schema to extend; apply before model()
        options: TaggableOptions or a mapping of option names
        config: Process-wide configuration, defaults to get_config()
        **overrides: Individual options (path, blacklist, fresh, hook, ...)

    Returns:
        The Tagger bound to this schema
    """
    config = config or get_config()
    opts = TaggableOptions.build(options, **overrides)

    # Add tags path
    schema.add({
        opts.path: {"type": [str], "default": None, **opts.storage_hints()}
    })

    # Collect taggable paths
    registry = TaggableRegistry.collect(schema, opts.path)
    tagger = Tagger(registry, opts, config)

    schema.static("TAGGABLE_FIELDS", registry.as_mapping())
    schema.static("TAGGABLE_PATH", opts.path)
    schema.static("TAGGABLE_OPTIONS", opts)
    schema.static("TAGGABLE_NORMALIZER", tagger.normalizer)

    def tag(self, *tags):
        """Add tags to this record and re-derive tags from its taggable fields."""
        return tagger.tag(self, *tags)

    def untag(self, *tags):
        """Remove tags from this record."""
        return tagger.untag(self, *tags)

    def pre_tag(document):
        document.tag()

    schema.method("tag", tag)
    schema.method("untag", untag)
    schema.pre(opts.hook, pre_tag)

    return tagger
