# ==============================================
# TOPIC 3: STORAGE
# ==============================================
#
# Host record layer the taggable plugin attaches to:
# schemas, live documents, and MongoDB persistence.
#
# Modules:
# --------
# - schema.py       → Field declarations, hooks, methods, plugins
# - document.py     → Document instances and the model() factory
# - mongo_client.py → MongoDB connection; save() runs lifecycle hooks
#
# ==============================================

from .schema import FieldKind, FieldSpec, Schema
from .document import Document, ValidationError, model
from .mongo_client import MongoClient

__all__ = [
    "FieldKind",
    "FieldSpec",
    "Schema",
    "Document",
    "ValidationError",
    "model",
    "MongoClient"
]
