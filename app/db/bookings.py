from typing import Any, Dict, List
from app.db.base import MongoStore, serialize

class BookingStore(MongoStore):
    collection_name = "bookings"

    async def find_by_date(self, date: str) -> List[Dict[str, Any]]:
        """Get all bookings for a calendar date"""
        return await self.find_all({"date": date})

    async def find_all_by_date(self) -> List[Dict[str, Any]]:
        """Get every booking, earliest date first"""
        cursor = self.collection.find({}).sort("date", 1)
        documents = await cursor.to_list(length=None)
        return [serialize(document) for document in documents]
