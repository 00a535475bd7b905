"""
Database operations - Generic single-document CRUD for all collections
"""
from typing import List, Dict, Optional, Sequence, Tuple
from datetime import datetime

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument

from svpg.config.database import db_config


def to_object_id(doc_id) -> Optional[ObjectId]:
    """Parse an id string; malformed ids yield None so callers treat them as not found"""
    if isinstance(doc_id, ObjectId):
        return doc_id
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError):
        return None


class DBOperations:
    """Generic database operations for MongoDB collections.

    Write conflicts such as ``DuplicateKeyError`` are left to propagate so the
    caller can report them.
    """

    @staticmethod
    async def get_all(
        collection_name: str,
        filter_query: Dict = None,
        sort: Sequence[Tuple[str, int]] = None,
        limit: int = 0,
    ) -> List[Dict]:
        """Get all documents from a collection with optional filtering and sorting"""
        collection = db_config.get_collection(collection_name)
        cursor = collection.find(filter_query or {})
        if sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=limit or None)

    @staticmethod
    async def get_by_id(collection_name: str, doc_id) -> Optional[Dict]:
        """Get a single document by ID"""
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        collection = db_config.get_collection(collection_name)
        return await collection.find_one({"_id": oid})

    @staticmethod
    async def get_one(collection_name: str, filter_query: Dict) -> Optional[Dict]:
        """Get a single document by filter query"""
        collection = db_config.get_collection(collection_name)
        return await collection.find_one(filter_query)

    @staticmethod
    async def create(collection_name: str, document: Dict) -> Dict:
        """Create a new document"""
        collection = db_config.get_collection(collection_name)
        now = datetime.utcnow()
        document["created_at"] = now
        document["updated_at"] = now
        result = await collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    @staticmethod
    async def update(collection_name: str, doc_id, update_data: Dict) -> Optional[Dict]:
        """Update a document by ID, returning the updated document"""
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        collection = db_config.get_collection(collection_name)
        update_data["updated_at"] = datetime.utcnow()
        return await collection.find_one_and_update(
            {"_id": oid},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )

    @staticmethod
    async def delete(collection_name: str, doc_id) -> bool:
        """Delete a document by ID"""
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        collection = db_config.get_collection(collection_name)
        result = await collection.delete_one({"_id": oid})
        return result.deleted_count > 0

db_ops = DBOperations()
