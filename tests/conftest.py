"""Shared test fixtures: an in-process Mongo database and a recording mail transport."""

import smtplib
from typing import Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.api.deps import get_notification_dispatcher
from app.core.config import DEFAULT_HOUR_CATALOGUE
from app.core.hours import HourCatalogue
from app.db.availability import AvailabilityStore
from app.db.bookings import BookingStore
from app.db.days import DayStore
from app.db.mongodb import create_indexes, db
from app.services.booking_service import BookingService
from app.services.day_service import DayService
from app.services.notification_service import EmailConfig, NotificationDispatcher
from app.services.reconciliation import AvailabilityReconciler
from main import app

ADMIN_EMAIL = "admin@studio.test"


class RecordingTransport:
    """Collects sent messages; recipients in fail_for get an SMTP error."""

    def __init__(self):
        self.messages = []
        self.fail_for = set()

    async def __call__(self, message) -> None:
        recipient = str(message["To"])
        if recipient in self.fail_for:
            raise smtplib.SMTPException(f"Mailbox unavailable: {recipient}")
        self.messages.append(message)

    def sent_to(self, recipient: str) -> List:
        return [message for message in self.messages if message["To"] == recipient]


@pytest.fixture
async def database():
    client = AsyncMongoMockClient()
    database = client["studio_bookings_test"]
    await create_indexes(database)

    previous = db.db
    db.db = database
    yield database
    db.db = previous


@pytest.fixture
def catalogue():
    return HourCatalogue(DEFAULT_HOUR_CATALOGUE)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def notifier(transport):
    config = EmailConfig(
        host="smtp.studio.test",
        port=587,
        username="bookings@studio.test",
        password="secret",
        sender="bookings@studio.test",
        admin_email=ADMIN_EMAIL,
        base_url="http://frontend.test",
        deposit_link="https://pay.studio.test/deposit",
    )
    return NotificationDispatcher(config, transport=transport)


@pytest.fixture
def booking_store(database):
    return BookingStore(database)


@pytest.fixture
def day_store(database):
    return DayStore(database)


@pytest.fixture
def availability_store(database):
    return AvailabilityStore(database)


@pytest.fixture
def reconciler(day_store, catalogue):
    return AvailabilityReconciler(day_store, catalogue, legacy_matching=True, max_retries=3)


@pytest.fixture
def booking_service(booking_store, day_store, availability_store, reconciler, notifier, catalogue):
    return BookingService(
        booking_store,
        day_store,
        availability_store,
        reconciler,
        notifier,
        catalogue,
    )


@pytest.fixture
def day_service(day_store, availability_store, catalogue):
    return DayService(day_store, availability_store, catalogue)


@pytest.fixture
async def client(database, notifier):
    app.dependency_overrides[get_notification_dispatcher] = lambda: notifier
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_booking(
    date: str = "2025-06-01",
    hours: str = "2 Hours/$70",
    name: str = "Jamie Rivera",
    email: str = "jamie@example.com",
    **extra,
) -> Dict:
    """Request body for a new booking."""
    booking = {
        "name": name,
        "email": email,
        "phoneNumber": "555-0100",
        "message": "Product shoot",
        "howDidYouHear": "Instagram",
        "date": date,
        "hours": hours,
    }
    booking.update(extra)
    return booking


def hour_map(day: Optional[Dict]) -> Dict[str, bool]:
    """{label: enabled} view of a day's hours, in stored order."""
    return {block["hour"]: block["enabled"] for block in (day or {}).get("hours", [])}


def hour_labels(day: Optional[Dict]) -> List[str]:
    return [block["hour"] for block in (day or {}).get("hours", [])]
