from typing import Any, Dict, List, Optional
from pymongo import ReturnDocument
from app.db.base import MongoStore, serialize

class DayStore(MongoStore):
    """
    Per-date availability records.

    Every write to a day's hours goes through save_hours, which only
    succeeds if the stored version still matches the one that was read.
    Legacy documents without a version field count as version 0.
    """
    collection_name = "days"

    async def find_by_date(self, date: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"date": date})

    async def find_blackout_days(self) -> List[Dict[str, Any]]:
        return await self.find_all({"disabled": True})

    async def ensure(self, date: str) -> bool:
        """
        Create an empty, enabled day if none exists for the date.

        Returns True if a new day was inserted.
        """
        result = await self.collection.update_one(
            {"date": date},
            {"$setOnInsert": {"disabled": False, "hours": [], "version": 0}},
            upsert=True
        )
        return result.upserted_id is not None

    async def create_day(
        self,
        date: str,
        hours: List[Dict[str, Any]],
        disabled: bool = False
    ) -> Dict[str, Any]:
        return await self.create({
            "date": date,
            "disabled": disabled,
            "hours": hours,
            "version": 0
        })

    async def save_hours(
        self,
        day: Dict[str, Any],
        hours: List[Dict[str, Any]],
        extra: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Conditionally replace a day's hours.

        Returns the updated day, or None if another writer changed the day
        since it was read.
        """
        version = day.get("version") or 0
        query = {"_id": day["_id"]}
        if version == 0:
            query["version"] = {"$in": [0, None]}
        else:
            query["version"] = version

        fields = {"hours": hours}
        if extra:
            fields.update(extra)

        updated = await self.collection.find_one_and_update(
            query,
            {"$set": fields, "$inc": {"version": 1}},
            return_document=ReturnDocument.AFTER
        )
        return serialize(updated)
