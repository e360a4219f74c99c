# ==============================================
# taggable: automatic keyword tags for records
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# taggable/
# ├── normalization/    # Topic 1: Phrases → canonical tags
# ├── extraction/       # Topic 2: Record fields → tag candidates
# ├── storage/          # Topic 3: Schemas, documents, MongoDB
# ├── config.py         # Configuration management
# ├── plugin.py         # taggable() plugin, tag/untag orchestration
# └── cli.py            # Command line entry point
#
# ==============================================

from .config import TaggableConfig, MongoConfig, get_config
from .normalization import StopwordCorpus, TagNormalizer, words
from .extraction import FieldExtractor, TaggableRegistry, ValueShape
from .storage import Document, FieldKind, FieldSpec, MongoClient, Schema, ValidationError, model
from .plugin import Tagger, TaggableOptions, taggable

__version__ = "0.1.0"

__all__ = [
    "TaggableConfig",
    "MongoConfig",
    "get_config",
    "StopwordCorpus",
    "TagNormalizer",
    "words",
    "FieldExtractor",
    "TaggableRegistry",
    "ValueShape",
    "Document",
    "FieldKind",
    "FieldSpec",
    "MongoClient",
    "Schema",
    "ValidationError",
    "model",
    "Tagger",
    "TaggableOptions",
    "taggable",
]
