from functools import lru_cache
from fastapi import Depends
from app.core.config import settings
from app.core.hours import HourCatalogue, get_hour_catalogue
from app.db.availability import AvailabilityStore
from app.db.bookings import BookingStore
from app.db.days import DayStore
from app.db.mongodb import get_database
from app.services.booking_service import BookingService
from app.services.day_service import DayService
from app.services.notification_service import EmailConfig, NotificationDispatcher
from app.services.reconciliation import AvailabilityReconciler

@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Email dispatcher built once from settings."""
    return NotificationDispatcher(EmailConfig.from_settings(settings))

async def get_booking_store(database=Depends(get_database)) -> BookingStore:
    return BookingStore(database)

async def get_day_store(database=Depends(get_database)) -> DayStore:
    return DayStore(database)

async def get_availability_store(database=Depends(get_database)) -> AvailabilityStore:
    return AvailabilityStore(database)

async def get_reconciler(
    days: DayStore = Depends(get_day_store),
    catalogue: HourCatalogue = Depends(get_hour_catalogue)
) -> AvailabilityReconciler:
    return AvailabilityReconciler(
        days,
        catalogue,
        legacy_matching=settings.LEGACY_HOUR_MATCHING,
        max_retries=settings.DAY_UPDATE_MAX_RETRIES
    )

async def get_booking_service(
    bookings: BookingStore = Depends(get_booking_store),
    days: DayStore = Depends(get_day_store),
    availability: AvailabilityStore = Depends(get_availability_store),
    reconciler: AvailabilityReconciler = Depends(get_reconciler),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
    catalogue: HourCatalogue = Depends(get_hour_catalogue)
) -> BookingService:
    return BookingService(
        bookings,
        days,
        availability,
        reconciler,
        notifier,
        catalogue,
        enforce_booking_window=settings.ENFORCE_BOOKING_WINDOW,
        notify_on_status_change=settings.NOTIFY_ON_STATUS_CHANGE
    )

async def get_day_service(
    days: DayStore = Depends(get_day_store),
    availability: AvailabilityStore = Depends(get_availability_store),
    catalogue: HourCatalogue = Depends(get_hour_catalogue)
) -> DayService:
    return DayService(days, availability, catalogue)
