"""Counter stores with an atomic increment-or-create primitive."""

import asyncio
from typing import Any, Protocol

import structlog
from pymongo import ASCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from bms.core.modules.counter.models import Counter, ScopeKey
from bms.errors import StoreUnavailableError

logger = structlog.get_logger(__name__)

TYPE_YEAR_INDEX = "type_year_unique"
TYPE_LIFETIME_INDEX = "type_lifetime_unique"


class CounterConflictError(Exception):
    """Raised when a store rejects an increment because of a uniqueness violation.

    Happens when concurrent first allocations race to create the same counter.
    Nothing has been written when this is raised.
    """

    def __init__(self, scope: ScopeKey) -> None:
        self.scope = scope
        super().__init__(f"Counter conflict for {scope.type} {scope.year or '(lifetime)'}")


class CounterStore(Protocol):
    """Persisted scope key -> integer mapping."""

    async def find_and_increment(self, scope: ScopeKey) -> int:
        """Increment the counter for `scope`, creating it at 1 if absent, and return the new value."""
        ...

    async def get_current(self, scope: ScopeKey) -> int:
        """Return the last issued value, or 0 when the counter does not exist."""
        ...

    async def set_value(self, scope: ScopeKey, value: int) -> None:
        """Overwrite the counter. Maintenance only, never used to allocate."""
        ...

    async def ensure_indexes(self) -> None: ...


class MongoCounterStore:
    """Counter store backed by a MongoDB collection."""

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def ensure_indexes(self) -> None:
        """Create the partial unique indexes.

        (type, year) is unique among year-scoped counters, and type alone is unique
        among lifetime counters. Lifetime counters of different types never collide
        on their shared null year.
        """
        try:
            await self._collection.create_index(
                [("type", ASCENDING), ("year", ASCENDING)],
                name=TYPE_YEAR_INDEX,
                unique=True,
                partialFilterExpression={"year": {"$type": "string"}},
            )
            await self._collection.create_index(
                [("type", ASCENDING)],
                name=TYPE_LIFETIME_INDEX,
                unique=True,
                partialFilterExpression={"year": {"$type": "null"}},
            )
        except PyMongoError as e:
            raise StoreUnavailableError("Failed to create counter indexes") from e

    async def drop_legacy_indexes(self) -> list[str]:
        """Drop every counter index except _id and the current partial indexes."""
        keep = {"_id_", TYPE_YEAR_INDEX, TYPE_LIFETIME_INDEX}
        dropped: list[str] = []
        try:
            indexes = await self._collection.index_information()
            for name in indexes:
                if name not in keep:
                    await self._collection.drop_index(name)
                    dropped.append(name)
        except PyMongoError as e:
            raise StoreUnavailableError("Failed to drop legacy counter indexes") from e
        return dropped

    async def normalize_lifetime_counters(self) -> int:
        """Store an explicit null year on counters that have no year field at all."""
        result = await self._collection.update_many({"year": {"$exists": False}}, {"$set": {"year": None}})
        return result.modified_count

    async def find_and_increment(self, scope: ScopeKey) -> int:
        try:
            doc = await self._collection.find_one_and_update(
                scope.to_filter(),
                {"$inc": {"seq": 1}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise CounterConflictError(scope) from e
        except PyMongoError as e:
            raise StoreUnavailableError(f"Counter store failed for {scope.type}") from e
        # An upserted counter starts from the missing seq, so the first value is 1
        return Counter.model_validate(doc).seq

    async def get_current(self, scope: ScopeKey) -> int:
        try:
            doc = await self._collection.find_one(scope.to_filter())
        except PyMongoError as e:
            raise StoreUnavailableError(f"Counter store failed for {scope.type}") from e
        if doc:
            return Counter.model_validate(doc).seq
        return 0

    async def set_value(self, scope: ScopeKey, value: int) -> None:
        if value < 0:
            raise ValueError("Counter value must be non-negative")
        try:
            await self._collection.update_one(scope.to_filter(), {"$set": {"seq": value}}, upsert=True)
        except DuplicateKeyError as e:
            raise CounterConflictError(scope) from e
        except PyMongoError as e:
            raise StoreUnavailableError(f"Counter store failed for {scope.type}") from e


class InMemoryCounterStore:
    """Counter store for a single process, serialized by an asyncio lock."""

    def __init__(self) -> None:
        self._values: dict[ScopeKey, int] = {}
        self._lock = asyncio.Lock()

    async def ensure_indexes(self) -> None:
        """Scope keys are dict keys, uniqueness holds already."""

    async def find_and_increment(self, scope: ScopeKey) -> int:
        async with self._lock:
            value = self._values.get(scope, 0) + 1
            self._values[scope] = value
            return value

    async def get_current(self, scope: ScopeKey) -> int:
        return self._values.get(scope, 0)

    async def set_value(self, scope: ScopeKey, value: int) -> None:
        if value < 0:
            raise ValueError("Counter value must be non-negative")
        async with self._lock:
            self._values[scope] = value

    def snapshot(self) -> dict[ScopeKey, int]:
        return dict(self._values)
