from typing import Any, Dict, List
import logging
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.hours import HourCatalogue
from app.db.availability import AvailabilityStore
from app.db.days import DayStore
from app.schemas.day import DayCreate, DayEdit, DayHoursUpdate, HourBlock
from app.services.reconciliation import to_documents

logger = logging.getLogger(__name__)

class DayService:
    """Staff-facing management of day records and the booking horizon."""

    def __init__(self, days: DayStore, availability: AvailabilityStore, catalogue: HourCatalogue):
        self.days = days
        self.availability = availability
        self.catalogue = catalogue

    async def list_days(self) -> List[Dict[str, Any]]:
        return await self.days.find_all()

    async def list_blackout_days(self) -> List[Dict[str, Any]]:
        return await self.days.find_blackout_days()

    async def get_day(self, date: str) -> Dict[str, Any]:
        day = await self.days.find_by_date(date)
        if not day:
            raise NotFoundError("Day not found")
        return day

    async def create_day(self, day_in: DayCreate) -> Dict[str, Any]:
        if await self.days.exists({"date": day_in.date}):
            raise ValidationError("Date already exists")

        hours = self._prepare_hours(day_in.hours)
        day = await self.days.create_day(day_in.date, hours, disabled=day_in.disabled)
        logger.info(f"Created day {day_in.date}")
        return day

    async def edit_day(self, day_edit: DayEdit) -> Dict[str, Any]:
        """
        Toggle a day's blackout flag, creating the day if needed.

        Disabling a day clears its hours.
        """
        day = await self.days.find_by_date(day_edit.date)
        if not day:
            logger.info(f"Created day {day_edit.date} (disabled={day_edit.disabled})")
            return await self.days.create_day(day_edit.date, [], disabled=day_edit.disabled)

        hours = [] if day_edit.disabled else day.get("hours") or []
        updated = await self.days.save_hours(day, hours, extra={"disabled": day_edit.disabled})
        if updated is None:
            raise ConflictError("Day was changed by another request, please retry")

        logger.info(f"Day {day_edit.date} disabled={day_edit.disabled}")
        return updated

    async def update_or_create_day(self, day_update: DayHoursUpdate) -> Dict[str, Any]:
        """Replace a day's hours and re-enable it, or create it with those hours."""
        hours = self._prepare_hours(day_update.selectedHours)

        day = await self.days.find_by_date(day_update.date)
        if not day:
            logger.info(f"Created day {day_update.date} with {len(hours)} hours")
            return await self.days.create_day(day_update.date, hours)

        updated = await self.days.save_hours(day, hours, extra={"disabled": False})
        if updated is None:
            raise ConflictError("Day was changed by another request, please retry")

        logger.info(f"Updated hours for {day_update.date}")
        return updated

    async def get_max_date(self) -> str:
        availability = await self.availability.get()
        if not availability or not availability.get("maxDate"):
            raise NotFoundError("Max date not found")
        return availability["maxDate"]

    async def update_max_date(self, max_date: str) -> Dict[str, Any]:
        availability = await self.availability.set_max_date(max_date)
        logger.info(f"Max booking date set to {max_date}")
        return availability

    def _prepare_hours(self, blocks: List[HourBlock]) -> List[Dict[str, Any]]:
        unknown = [block.hour for block in blocks if block.hour not in self.catalogue]
        if unknown:
            raise ValidationError(f"Unknown hours option(s): {', '.join(unknown)}")

        labels = [block.hour for block in blocks]
        if len(set(labels)) != len(labels):
            raise ValidationError("Each hours option may only appear once per day")

        return to_documents(self.catalogue.sort(blocks))
