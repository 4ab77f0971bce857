import pytest
from pymongo.errors import CollectionInvalid, OperationFailure


class FakeCollection:
    """In-memory stand-in for the parts of pymongo's Collection the bootstrap touches."""

    def __init__(self, name):
        self.name = name
        self.indexes = {"_id_": {"v": 2, "key": [("_id", 1)]}}
        self.create_calls = 0

    def index_information(self):
        return {name: dict(info) for name, info in self.indexes.items()}

    def create_indexes(self, models):
        self.create_calls += 1
        names = []
        for model in models:
            doc = model.document
            key = list(doc["key"].items())
            current = self.indexes.get(doc["name"])
            if current is not None and current["key"] != key:
                raise OperationFailure("Index key specs conflict", code=86)
            for other, info in self.indexes.items():
                if other != doc["name"] and info["key"] == key:
                    raise OperationFailure(
                        f"Index already exists with a different name: {other}", code=85)
            self.indexes[doc["name"]] = {"v": 2, "key": key}
            names.append(doc["name"])
        return names


class FakeDatabase:
    """In-memory stand-in for pymongo's Database."""

    def __init__(self, name="mental_chatbot"):
        self.name = name
        self.collections = {}

    def create_collection(self, name):
        if name in self.collections:
            raise CollectionInvalid(f"collection {name} already exists")
        self.collections[name] = FakeCollection(name)
        return self.collections[name]

    def list_collection_names(self):
        return list(self.collections)

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection(name))


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove bootstrap-related environment variables."""
    for var in (
        "MONGO_INITDB_DATABASE",
        "MONGODB_DATABASE",
        "MONGODB_URI",
        "MONGODB_FAIL_ON_EXISTING",
        "MONGODB_CONNECT_RETRIES",
        "MONGODB_CONNECT_RETRY_DELAY",
        "APP_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
