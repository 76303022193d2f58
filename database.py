# database.py
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional
from config import get_settings

ATTENDANCE = "attendance"
HOLIDAYS = "holidays"
USERS = "users"


def _to_record(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Expose the document key as ``id`` instead of Mongo's ``_id``."""
    if doc is None:
        return None
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


class MongoStore:
    """
    Key/value document access on top of a motor database.

    Every collection is keyed by ``_id``; the callers decide the key format
    (``{uid}_{date}`` for attendance, the date for holidays, the uid for users).
    """

    def __init__(self, db):
        self.db = db

    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        doc = await self.db[collection].find_one({"_id": key})
        return _to_record(doc)

    async def create(self, collection: str, key: str, doc: Dict[str, Any]) -> bool:
        """Insert only if no document has this key. Returns False on conflict."""
        try:
            await self.db[collection].insert_one({**doc, "_id": key})
        except DuplicateKeyError:
            return False
        return True

    async def put(self, collection: str, key: str, doc: Dict[str, Any]) -> None:
        await self.db[collection].replace_one({"_id": key}, {**doc, "_id": key}, upsert=True)

    async def update(
        self,
        collection: str,
        key: str,
        fields: Dict[str, Any],
        where: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Set ``fields`` on the document. With ``where``, only a document that
        also matches those conditions is touched. Returns whether one matched.
        """
        result = await self.db[collection].update_one({**(where or {}), "_id": key}, {"$set": fields})
        return result.matched_count > 0

    async def delete(self, collection: str, key: str) -> bool:
        result = await self.db[collection].delete_one({"_id": key})
        return result.deleted_count > 0

    async def find(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
        descending: bool = False,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        cursor = self.db[collection].find(filters or {})
        if sort:
            cursor = cursor.sort(sort, DESCENDING if descending else ASCENDING)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=limit or None)
        return [_to_record(doc) for doc in docs]

    async def find_range(self, collection: str, field: str, start: Any, end: Any) -> List[Dict[str, Any]]:
        """Documents whose ``field`` lies in ``[start, end]``, ascending."""
        return await self.find(collection, {field: {"$gte": start, "$lte": end}}, sort=field)

    async def get_many(self, collection: str, keys: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Fetch several documents by key in one round trip."""
        keys = list(keys)
        docs = await self.db[collection].find({"_id": {"$in": keys}}).to_list(length=None)
        return {str(doc["_id"]): _to_record(doc) for doc in docs}


@lru_cache()
def get_client() -> AsyncIOMotorClient:
    return AsyncIOMotorClient(get_settings().mongo_uri, tz_aware=True)


def get_store() -> MongoStore:
    return MongoStore(get_client()[get_settings().mongo_db])
