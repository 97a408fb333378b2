# database.py
from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import DuplicateKeyError, PyMongoError

import config
from errors import PersistenceError

logger = logging.getLogger(__name__)

USERS = "users"
ASSIGNMENTS = "assignments"
QUIZZES = "quizes"

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    global _client
    if _client is None:
        logger.info("Opening MongoDB client")
        _client = AsyncIOMotorClient(config.MONGODB_URI)
    return _client


def get_db():
    return get_client()[config.MONGODB_DB]


async def init_indexes(db):
    await db[USERS].create_index("email", unique=True)
    await db[USERS].create_index("userCode", unique=True)
    await db[ASSIGNMENTS].create_index("assignmentCode", unique=True)
    await db[QUIZZES].create_index("quizeCode", unique=True)


class DocumentStore:
    """Thin wrapper over one collection. Documents go in and come out as plain dicts without `_id`."""

    def __init__(self, collection, name: str):
        self.collection = collection
        self.name = name

    async def find_one(self, criteria: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one(criteria, {"_id": 0})
        except PyMongoError as e:
            logger.error(f"find_one on {self.name} failed: {e}")
            raise PersistenceError(f"Lookup in {self.name} failed") from e

    async def find(self, criteria: Dict[str, Any] = None) -> List[Dict[str, Any]]:
        try:
            return await self.collection.find(criteria or {}, {"_id": 0}).to_list(None)
        except PyMongoError as e:
            logger.error(f"find on {self.name} failed: {e}")
            raise PersistenceError(f"Query on {self.name} failed") from e

    async def exists(self, criteria: Dict[str, Any]) -> bool:
        return await self.find_one(criteria) is not None

    async def save(self, document: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(document)
        try:
            await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key on insert into {self.name}: {e}")
            raise PersistenceError(f"Could not create {self.name} entry: duplicate key", 409) from e
        except PyMongoError as e:
            logger.error(f"insert into {self.name} failed: {e}")
            raise PersistenceError(f"Could not create {self.name} entry") from e
        document.pop("_id", None)
        return document

    async def set_fields(self, criteria: Dict[str, Any], fields: Dict[str, Any]) -> int:
        try:
            result = await self.collection.update_one(criteria, {"$set": fields})
        except DuplicateKeyError as e:
            raise PersistenceError(f"Could not update {self.name} entry: duplicate key", 409) from e
        except PyMongoError as e:
            logger.error(f"update on {self.name} failed: {e}")
            raise PersistenceError(f"Could not update {self.name} entry") from e
        return result.matched_count


def users_store(db=Depends(get_db)) -> DocumentStore:
    return DocumentStore(db[USERS], USERS)


def assignments_store(db=Depends(get_db)) -> DocumentStore:
    return DocumentStore(db[ASSIGNMENTS], ASSIGNMENTS)


def quizzes_store(db=Depends(get_db)) -> DocumentStore:
    return DocumentStore(db[QUIZZES], QUIZZES)
