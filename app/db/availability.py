from typing import Any, Dict, Optional
from pymongo import ReturnDocument
from app.db.base import MongoStore, serialize

class AvailabilityStore(MongoStore):
    """Singleton record holding the furthest bookable date."""
    collection_name = "availability"

    async def get(self) -> Optional[Dict[str, Any]]:
        return await self.find_one({})

    async def set_max_date(self, max_date: str) -> Dict[str, Any]:
        updated = await self.collection.find_one_and_update(
            {},
            {"$set": {"maxDate": max_date}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return serialize(updated)
