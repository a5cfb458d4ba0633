from typing import Any, Dict, List, Optional
from bson import ObjectId
from bson.errors import InvalidId

def to_object_id(document_id: str) -> Optional[ObjectId]:
    """Parse a document id, returning None for malformed ids."""
    try:
        return ObjectId(document_id)
    except (InvalidId, TypeError):
        return None

def serialize(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Expose the Mongo _id as a string id."""
    if document is None:
        return None
    document["id"] = str(document["_id"])
    return document

class MongoStore:
    """Document store over a single Motor collection."""
    collection_name: str = ""

    def __init__(self, database):
        self.collection = database[self.collection_name]

    async def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        return serialize(await self.collection.find_one({"_id": object_id}))

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return serialize(await self.collection.find_one(query))

    async def find_all(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        cursor = self.collection.find(query or {})
        documents = await cursor.to_list(length=None)
        return [serialize(document) for document in documents]

    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.collection.insert_one(dict(fields))
        return serialize(await self.collection.find_one({"_id": result.inserted_id}))

    async def update(
        self,
        document_id: str,
        fields: Dict[str, Any],
        expected: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Set fields on a document.

        When expected is given the write only happens if the document still
        holds those values. Returns the updated document, or None if nothing
        matched.
        """
        object_id = to_object_id(document_id)
        if object_id is None:
            return None

        query = {"_id": object_id}
        if expected:
            query.update(expected)

        result = await self.collection.update_one(query, {"$set": fields})
        if result.matched_count == 0:
            return None

        return serialize(await self.collection.find_one({"_id": object_id}))

    async def delete(self, document_id: str) -> bool:
        object_id = to_object_id(document_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count > 0

    async def exists(self, query: Dict[str, Any]) -> bool:
        return await self.collection.find_one(query, {"_id": 1}) is not None
