"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar, Union
from abc import ABC
from datetime import datetime

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection, ReturnDocument
from pymongo.database import Database

from app.exceptions import ServiceValidationError

IdType = TypeVar("IdType")

Document = Dict[str, Any]


def parse_object_id(value: Union[str, ObjectId], thing: str = "resource") -> ObjectId:
    """Convert a path/body id into an ObjectId.

    Raises:
        ServiceValidationError: "Invalid <thing> ID format" for malformed ids
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ServiceValidationError(
            f"Invalid {thing} ID format", details={"id": str(value)}
        )


class BaseRepository(Generic[IdType], ABC):
    """
    Base repository providing common CRUD operations over one collection.
    All repositories should inherit from this class.
    """

    collection_name: str = ""

    def __init__(self, db: Database):
        self.db = db
        self.collection: Collection = db[self.collection_name]

    def get_by_id(self, entity_id: IdType) -> Optional[Document]:
        """Get document by ``_id``"""
        return self.collection.find_one({"_id": entity_id})

    def find(
        self,
        query: Mapping[str, Any],
        sort: Optional[List[tuple]] = None,
        skip: int = 0,
        limit: int = 0,
        projection: Optional[Mapping[str, Any]] = None,
    ) -> List[Document]:
        """Find documents with optional sort and pagination"""
        cursor = self.collection.find(query, projection)
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def count(self, query: Mapping[str, Any]) -> int:
        return self.collection.count_documents(query)

    def create(self, document: Document) -> Document:
        """Insert a document and return it with its ``_id``"""
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def update(
        self, entity_id: IdType, changes: Mapping[str, Any], touch: bool = True
    ) -> Optional[Document]:
        """Apply ``$set`` changes and return the updated document (None if missing)"""
        changes = dict(changes)
        if touch:
            changes["updated_at"] = datetime.utcnow()
        return self.collection.find_one_and_update(
            {"_id": entity_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )

    def delete(self, entity_id: IdType) -> bool:
        """Delete document by ID"""
        return self.collection.delete_one({"_id": entity_id}).deleted_count == 1

    def exists(self, entity_id: IdType) -> bool:
        """Check if document exists"""
        return self.collection.count_documents({"_id": entity_id}, limit=1) > 0
