# ==============================================
# MongoClient
# ==============================================
#
# PURPOSE:
#   Persist Documents to MongoDB. Every save runs the document's
#   lifecycle hooks first, which is where the taggable plugin
#   re-derives tags before they hit the database.
#
# CLASS: MongoClient
# ------------------
#   Stateful. Holds the connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, user=None, password=None)
#   - from_config(config: MongoConfig) -> MongoClient  (classmethod)
#
#   Methods:
#   --------
#   - uri -> str  (property, credentials only when both are set)
#   - connect() -> None
#   - disconnect() -> None
#   - collection_name(model) -> str
#       Lowercase plural of the model name ("User" -> "users").
#   - ensure_indexes(model) -> None
#       Index the tag path when the plugin's `index` option is set
#       ("text" creates a text index).
#   - save(document) -> ObjectId
#       validate() (runs "validate" hooks) → "save" hooks → upsert by _id.
#   - find(model, query) -> list[dict]
#   - find_by_tags(model, *tags) -> list[dict]
#       Normalize the tags like tag() does and match all of them.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MongoClient(...) as db:` usage.
#
# ==============================================

import pymongo
from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure

from ..config import MongoConfig


class MongoClient:
    def __init__(self, host, port, database, user=None, password=None):
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.client = None  # pymongo client, set by connect()

    @classmethod
    def from_config(cls, config: MongoConfig) -> "MongoClient":
        return cls(
            host=config.host,
            port=config.port,
            database=config.database,
            user=config.user,
            password=config.password
        )

    @property
    def uri(self) -> str:
        credentials = f"{self.user}:{self.password}@" if self.user and self.password else ""
        return f"mongodb://{credentials}{self.host}:{self.port}/{self.database}"

    def connect(self):
        # Open the pymongo client and ping the server before any save
        try:
            self.client = PyMongoClient(self.uri)
            self.client.admin.command('ping')
            print(f"Connected to MongoDB database '{self.database}'.")
        except ConnectionFailure as e:
            print(f"MongoDB unreachable at {self.host}:{self.port}: {e}")
            raise
        except OperationFailure as e:
            print(f"MongoDB rejected the credentials for '{self.database}': {e}")
            raise

    def disconnect(self):
        if self.client is None:
            return
        self.client.close()
        self.client = None
        print(f"Closed MongoDB connection to '{self.database}'.")

    def _collection(self, model):
        if self.client is None:
            raise RuntimeError("Not connected to MongoDB.")
        return self.client[self.database][self.collection_name(model)]

    @staticmethod
    def collection_name(model) -> str:
        name = getattr(model, "model_name", None) or model.__name__
        return f"{name.lower()}s"

    def ensure_indexes(self, model):
        # Index the tag path as configured by the taggable plugin
        collection = self._collection(model)
        path = getattr(model, "TAGGABLE_PATH", None)
        options = getattr(model, "TAGGABLE_OPTIONS", None)
        if not path or options is None or not options.index:
            return

        if options.index == "text":
            collection.create_index([(path, pymongo.TEXT)])
            print(f"Created text index on '{path}' in '{collection.name}'.")
        else:
            collection.create_index(path)
            print(f"Created index on '{path}' in '{collection.name}'.")

    def save(self, document):
        # Run lifecycle hooks, then insert or replace by _id.
        collection = self._collection(type(document))
        document.validate()
        document.run_hooks("save")
        data = document.to_mongo()
        collection.replace_one({"_id": data["_id"]}, data, upsert=True)
        print(f"Saved document {data['_id']} into '{collection.name}'.")
        return data["_id"]

    def find(self, model, query):
        # Query documents matching filter.
        collection = self._collection(model)
        return list(collection.find(query))

    def find_by_tags(self, model, *tags):
        # Match documents carrying every given tag.
        path = getattr(model, "TAGGABLE_PATH", "tags")
        normalizer = getattr(model, "TAGGABLE_NORMALIZER", None)
        if normalizer is None:
            raise ValueError(f"Model '{self.collection_name(model)}' is not taggable")
        normalized = normalizer.normalize(*tags)
        if not normalized:
            return []
        return self.find(model, {path: {"$all": normalized}})

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Exceptions raised inside the block still propagate
        self.disconnect()
        return False
