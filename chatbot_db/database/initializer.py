from enum import Enum
from typing import List
from pydantic import BaseModel, Field
from pymongo import IndexModel
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import CollectionInvalid, OperationFailure, PyMongoError
from chatbot_db.database.schemas import KNOWLEDGE_COLLECTION, MongoDBSchemas
import logging

logger = logging.getLogger(__name__)

# Server error codes
NAMESPACE_EXISTS = 48
INDEX_OPTIONS_CONFLICT = 85
INDEX_KEY_SPECS_CONFLICT = 86


class StepStatus(str, Enum):
    CREATED = "created"
    EXISTED = "existed"


class ExistingPolicy(str, Enum):
    """What to do when a collection or index is already there."""
    TOLERATE = "tolerate"
    FAIL = "fail"


class StepResult(BaseModel):
    """Outcome of one bootstrap step."""
    step: str = Field(description="Step name, e.g. 'create_collection'")
    target: str = Field(description="Collection or index the step acted on")
    status: StepStatus


class InitializationReport(BaseModel):
    """
    Summary of a completed bootstrap run.

    Only produced when every step succeeded; a failed step raises
    InitializationError instead.
    """
    database: str
    collection: str
    steps: List[StepResult] = Field(default_factory=list)

    @property
    def created(self) -> bool:
        """True when this run created anything."""
        return any(s.status == StepStatus.CREATED for s in self.steps)


class InitializationError(Exception):
    """A bootstrap step failed; the run was aborted at ``step``."""

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step


def create_collection(
    db: Database,
    name: str,
    on_existing: ExistingPolicy = ExistingPolicy.TOLERATE
) -> StepResult:
    """
    Create a collection, treating an existing one according to ``on_existing``.
    """
    step = "create_collection"
    try:
        db.create_collection(name)
    except CollectionInvalid as e:
        existed = e
    except OperationFailure as e:
        # Lost a race with another client creating the same collection
        if e.code != NAMESPACE_EXISTS:
            raise
        existed = e
    else:
        logger.info(f"Created collection: {db.name}.{name}")
        return StepResult(step=step, target=name, status=StepStatus.CREATED)

    if on_existing == ExistingPolicy.FAIL:
        raise InitializationError(step, f"collection '{name}' already exists") from existed
    logger.info(f"Collection {db.name}.{name} already exists")
    return StepResult(step=step, target=name, status=StepStatus.EXISTED)


def create_index(
    collection: Collection,
    index: IndexModel,
    on_existing: ExistingPolicy = ExistingPolicy.TOLERATE
) -> StepResult:
    """
    Create one index on ``collection``.

    An index with the same key pattern counts as existing, whatever its
    name. The same name over a different key, or any definition the
    server reports as conflicting, fails regardless of ``on_existing``.
    """
    step = "create_index"
    name = index.document["name"]
    keys = list(index.document["key"].items())

    indexes = collection.index_information()
    current = indexes.get(name)
    if current is not None and list(current["key"]) != keys:
        raise InitializationError(
            step, f"index '{name}' exists with keys {current['key']}, expected {keys}")

    existing = next(
        (n for n, info in indexes.items() if list(info["key"]) == keys), None)
    if existing is not None:
        if on_existing == ExistingPolicy.FAIL:
            raise InitializationError(step, f"index '{existing}' already exists")
        logger.info(f"Index {existing} already covers {keys} on {collection.name}")
        return StepResult(step=step, target=existing, status=StepStatus.EXISTED)

    try:
        collection.create_indexes([index])
    except OperationFailure as e:
        if e.code in (INDEX_OPTIONS_CONFLICT, INDEX_KEY_SPECS_CONFLICT):
            raise InitializationError(step, f"index '{name}' conflicts: {e}") from e
        raise

    logger.info(f"Created index {name} on {collection.name}")
    return StepResult(step=step, target=name, status=StepStatus.CREATED)


def initialize_database(
    db: Database,
    collection_name: str = KNOWLEDGE_COLLECTION,
    on_existing: ExistingPolicy = ExistingPolicy.TOLERATE
) -> InitializationReport:
    """
    Bring ``db`` into a ready state for knowledge storage.

    Steps run strictly in order: create the collection, the ascending
    ``category`` index, then the descending ``created_at`` index. The
    first failure aborts the run with InitializationError.

    Args:
        db: Selected database handle
        collection_name: Collection holding knowledge documents
        on_existing: Policy for objects left by a previous run

    Returns:
        InitializationReport with one StepResult per step
    """
    report = InitializationReport(database=db.name, collection=collection_name)

    try:
        report.steps.append(create_collection(db, collection_name, on_existing))

        collection = db[collection_name]
        for index in MongoDBSchemas.get_knowledge_indexes():
            report.steps.append(create_index(collection, index, on_existing))
    except PyMongoError as e:
        step = "create_index" if report.steps else "create_collection"
        raise InitializationError(step, str(e)) from e

    return report
