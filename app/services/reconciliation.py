"""
Day/hour availability reconciliation.

A Day's hours list holds the slots a client may still book. Booking
lifecycle events move labels in and out of that list:

- confirm: the confirmed label is removed. If that leaves the day with no
  hours at all, every other catalogue label is put back as bookable.
- deny: the label is appended if the day does not list it. A listed label,
  even a disabled one, is left as it is.
- delete: the label is released (re-enabled, or appended if absent).
- reschedule: the old label is released on the old date and the new label
  is marked unavailable on the new date.

The pure functions below do the list arithmetic. AvailabilityReconciler
loads the Day, applies one of them and writes the result back with a
version check, retrying when another request wrote the same Day first.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging
from pymongo.errors import DuplicateKeyError
from app.core.hours import HourCatalogue
from app.db.days import DayStore
from app.schemas.day import HourBlock

logger = logging.getLogger(__name__)

HoursMutation = Callable[[List[HourBlock]], List[HourBlock]]

def claim_hour(blocks: List[HourBlock], label: str, catalogue: HourCatalogue) -> List[HourBlock]:
    """Remove a confirmed label, refilling an exhausted day with the rest of the catalogue."""
    remaining = [block.model_copy() for block in blocks if block.hour != label]

    if not remaining:
        remaining = [HourBlock(hour=hour, enabled=True) for hour in catalogue if hour != label]

    return catalogue.sort(remaining)

def release_hour(
    blocks: List[HourBlock],
    label: str,
    catalogue: HourCatalogue,
    legacy: bool = False
) -> List[HourBlock]:
    """Make a label bookable again, appending it when the day does not list it."""
    blocks = [block.model_copy() for block in blocks]

    match = catalogue.find(blocks, label, legacy=legacy)
    if match:
        match.enabled = True
    else:
        blocks.append(HourBlock(hour=label, enabled=True))

    return catalogue.sort(blocks)

def restore_hour(blocks: List[HourBlock], label: str, catalogue: HourCatalogue) -> List[HourBlock]:
    """Put a denied label back when the day does not list it; a listed label is left unchanged."""
    blocks = [block.model_copy() for block in blocks]
    if catalogue.find(blocks, label) is not None:
        return blocks

    blocks.append(HourBlock(hour=label, enabled=True))
    return catalogue.sort(blocks)

def reserve_hour(
    blocks: List[HourBlock],
    label: str,
    catalogue: HourCatalogue
) -> List[HourBlock]:
    """Mark a listed label as unavailable. Unlisted labels are left alone."""
    blocks = [block.model_copy() for block in blocks]

    match = catalogue.find(blocks, label)
    if match:
        match.enabled = False

    return catalogue.sort(blocks)

def to_blocks(day: Dict[str, Any]) -> List[HourBlock]:
    return [HourBlock(**block) for block in day.get("hours") or []]

def to_documents(blocks: List[HourBlock]) -> List[Dict[str, Any]]:
    return [block.model_dump() for block in blocks]

@dataclass
class ReconciliationResult:
    date: str
    applied: bool
    changed: bool = False
    created: bool = False
    reason: Optional[str] = None

class AvailabilityReconciler:
    """Keeps Day.hours in step with booking lifecycle events."""

    def __init__(
        self,
        days: DayStore,
        catalogue: HourCatalogue,
        legacy_matching: bool = True,
        max_retries: int = 5
    ):
        self.days = days
        self.catalogue = catalogue
        self.legacy_matching = legacy_matching
        self.max_retries = max(1, max_retries)

    async def on_confirm(self, booking: Dict[str, Any]) -> ReconciliationResult:
        label = booking["hours"]
        return await self._apply(
            booking["date"],
            lambda blocks: claim_hour(blocks, label, self.catalogue),
            event="confirm"
        )

    async def on_deny(self, booking: Dict[str, Any]) -> ReconciliationResult:
        label = booking["hours"]
        return await self._apply(
            booking["date"],
            lambda blocks: restore_hour(blocks, label, self.catalogue),
            event="deny"
        )

    async def on_delete(self, booking: Dict[str, Any]) -> ReconciliationResult:
        label = booking["hours"]
        return await self._apply(
            booking["date"],
            lambda blocks: release_hour(blocks, label, self.catalogue, legacy=self.legacy_matching),
            event="delete"
        )

    async def on_reschedule(
        self,
        old_date: str,
        old_hours: str,
        new_date: str,
        new_hours: str
    ) -> List[ReconciliationResult]:
        """
        Release the old slot and reserve the new one.

        A missing old day is skipped. A missing new day is created holding
        only the new label, already marked unavailable.
        """
        seed = [HourBlock(hour=new_hours, enabled=False)]

        if old_date == new_date:
            def move(blocks: List[HourBlock]) -> List[HourBlock]:
                released = release_hour(blocks, old_hours, self.catalogue)
                return reserve_hour(released, new_hours, self.catalogue)

            result = await self._apply(new_date, move, event="reschedule", seed=seed)
            return [result]

        released = await self._apply(
            old_date,
            lambda blocks: release_hour(blocks, old_hours, self.catalogue),
            event="reschedule-release"
        )
        reserved = await self._apply(
            new_date,
            lambda blocks: reserve_hour(blocks, new_hours, self.catalogue),
            event="reschedule-reserve",
            seed=seed
        )
        return [released, reserved]

    async def _apply(
        self,
        date: str,
        mutate: HoursMutation,
        event: str,
        seed: Optional[List[HourBlock]] = None
    ) -> ReconciliationResult:
        for attempt in range(1, self.max_retries + 1):
            day = await self.days.find_by_date(date)

            if not day:
                if seed is None:
                    logger.warning(f"No day record for {date}; skipping {event} slot update")
                    return ReconciliationResult(date=date, applied=False, reason="day not found")

                try:
                    await self.days.create_day(date, to_documents(self.catalogue.sort(seed)))
                except DuplicateKeyError:
                    # Someone else created the day; mutate theirs instead
                    logger.info(f"Day {date} created concurrently, retrying {event}")
                    continue

                logger.info(f"Created day {date} during {event}")
                return ReconciliationResult(date=date, applied=True, changed=True, created=True)

            current = to_blocks(day)
            updated = mutate(current)

            if updated == current:
                return ReconciliationResult(date=date, applied=True, changed=False)

            saved = await self.days.save_hours(day, to_documents(updated))
            if saved:
                logger.info(f"Updated hours for {date} after {event}")
                return ReconciliationResult(date=date, applied=True, changed=True)

            logger.warning(f"Day {date} changed during {event} (attempt {attempt}/{self.max_retries}), retrying")

        logger.error(f"Gave up updating hours for {date} after {self.max_retries} attempts ({event})")
        return ReconciliationResult(date=date, applied=False, reason="concurrent update conflict")
