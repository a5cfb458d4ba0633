from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
from app.core.exceptions import (
    ConflictError, InvalidStatusTransition, NotFoundError, ValidationError
)
from app.core.hours import HourCatalogue
from app.db.availability import AvailabilityStore
from app.db.bookings import BookingStore
from app.db.days import DayStore
from app.schemas.booking import (
    BookingCreate, BookingReschedule, BookingStatus, BookingUpdate,
    PaymentMethod, PaymentStatus
)
from app.services.email_templates import NotificationKind
from app.services.notification_service import NotificationDispatcher, NotificationResult
from app.services.reconciliation import AvailabilityReconciler
from app.utils.dates import parse_calendar_date

logger = logging.getLogger(__name__)

TEMPLATE_FIELDS = (
    "name", "email", "phoneNumber", "message", "howDidYouHear",
    "date", "hours", "status", "paymentStatus", "paymentMethod"
)

def template_params(booking: Dict[str, Any]) -> Dict[str, Any]:
    params = {field: booking.get(field) for field in TEMPLATE_FIELDS}
    params["id"] = booking.get("id", str(booking.get("_id", "")))
    return params

class BookingService:
    """
    Booking lifecycle: create, confirm, deny, reschedule, delete.

    Booking writes happen first; the Day hours are reconciled afterwards and
    emails are sent last. Neither of the later steps can fail a request once
    the booking itself has been written.
    """

    def __init__(
        self,
        bookings: BookingStore,
        days: DayStore,
        availability: AvailabilityStore,
        reconciler: AvailabilityReconciler,
        notifier: NotificationDispatcher,
        catalogue: HourCatalogue,
        enforce_booking_window: bool = True,
        notify_on_status_change: bool = True
    ):
        self.bookings = bookings
        self.days = days
        self.availability = availability
        self.reconciler = reconciler
        self.notifier = notifier
        self.catalogue = catalogue
        self.enforce_booking_window = enforce_booking_window
        self.notify_on_status_change = notify_on_status_change

    async def create_booking(self, booking_in: BookingCreate) -> Dict[str, Any]:
        """
        Create a new booking request.

        The Day for the requested date is created if needed, but none of its
        hours are touched: a slot is only taken off the calendar once staff
        confirm the booking.
        """
        self._check_hours(booking_in.hours)

        if self.enforce_booking_window:
            await self._check_booking_window(booking_in.date)

        if await self.days.ensure(booking_in.date):
            logger.info(f"Created day record for {booking_in.date}")

        booking_data = booking_in.model_dump()
        booking_data["status"] = BookingStatus.UNCONFIRMED.value
        booking_data["paymentStatus"] = PaymentStatus.UNPAID.value
        booking_data["paymentMethod"] = PaymentMethod.NONE.value
        booking_data["createdAt"] = datetime.utcnow()

        booking = await self.bookings.create(booking_data)
        logger.info(f"Booking {booking['id']} created for {booking['date']} ({booking['hours']})")

        # Customer first, then admin; each failure is isolated
        params = template_params(booking)
        customer = await self.notifier.notify(NotificationKind.BOOKING_RECEIVED, booking["email"], params)
        admin = await self.notifier.notify_admin(NotificationKind.NEW_BOOKING, params)

        if customer.sent and admin.sent:
            message = "Booking created successfully"
        else:
            message = "Booking created, but some notification emails could not be sent"

        return {
            "booking": booking,
            "emailStatus": {"customer": customer.as_status(), "admin": admin.as_status()},
            "message": message
        }

    async def list_bookings(self) -> List[Dict[str, Any]]:
        return await self.bookings.find_all_by_date()

    async def get_booking(self, booking_id: str) -> Dict[str, Any]:
        booking = await self.bookings.find_by_id(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    async def update_booking(self, booking_id: str, booking_update: BookingUpdate) -> Dict[str, Any]:
        """
        Update status and/or payment fields of a booking.

        Status only moves from unconfirmed to confirmed or denied. Asking for
        the status a booking already has is a no-op for the status field.
        """
        booking = await self.get_booking(booking_id)

        changes = booking_update.model_dump(mode="json", exclude_none=True)
        if not changes:
            raise ValidationError("No fields to update")

        requested = changes.pop("status", None)
        transition = None
        if requested and requested != booking["status"]:
            self._check_transition(booking["status"], requested)
            transition = requested

        if transition:
            fields = dict(changes, status=transition, updatedAt=datetime.utcnow())
            updated = await self.bookings.update(
                booking_id, fields, expected={"status": BookingStatus.UNCONFIRMED.value}
            )
            if updated is None:
                # Lost a race with another status change
                current = await self.get_booking(booking_id)
                if current["status"] != transition:
                    raise InvalidStatusTransition(current["status"], transition)
                transition = None
                updated = await self._update_fields(booking_id, changes) if changes else current
        elif changes:
            updated = await self._update_fields(booking_id, changes)
        else:
            logger.info(f"Booking {booking_id} already {booking['status']}; nothing to update")
            return booking

        if transition == BookingStatus.CONFIRMED.value:
            logger.info(f"Booking {booking_id} confirmed")
            await self.reconciler.on_confirm(updated)
        elif transition == BookingStatus.DENIED.value:
            logger.info(f"Booking {booking_id} denied")
            await self.reconciler.on_deny(updated)

        if self.notify_on_status_change:
            if transition:
                await self._notify_status(updated, transition)
            if "paymentStatus" in changes and changes["paymentStatus"] != booking.get("paymentStatus"):
                await self.notifier.notify(
                    NotificationKind.PAYMENT_STATUS, updated["email"], template_params(updated)
                )

        return updated

    async def confirm_booking(self, booking_id: str) -> Dict[str, Any]:
        return await self.update_booking(booking_id, BookingUpdate(status=BookingStatus.CONFIRMED))

    async def deny_booking(self, booking_id: str) -> Dict[str, Any]:
        return await self.update_booking(booking_id, BookingUpdate(status=BookingStatus.DENIED))

    async def reschedule_booking(self, booking_id: str, reschedule: BookingReschedule) -> Dict[str, Any]:
        """
        Move a booking to a new date and/or hours option.

        Allowed in any status and never changes it. The old slot is released
        on the old date and the new one reserved on the new date.
        """
        booking = await self.get_booking(booking_id)
        self._check_hours(reschedule.hours)

        old_date, old_hours = booking["date"], booking["hours"]
        if old_date == reschedule.date and old_hours == reschedule.hours:
            return booking

        updated = await self.bookings.update(
            booking_id,
            {"date": reschedule.date, "hours": reschedule.hours, "updatedAt": datetime.utcnow()},
            expected={"date": old_date, "hours": old_hours}
        )
        if updated is None:
            await self.get_booking(booking_id)
            raise ConflictError("Booking was changed by another request, reload it and try again")

        logger.info(
            f"Booking {booking_id} rescheduled from {old_date} ({old_hours}) "
            f"to {reschedule.date} ({reschedule.hours})"
        )
        await self.reconciler.on_reschedule(old_date, old_hours, reschedule.date, reschedule.hours)

        if self.notify_on_status_change:
            await self.notifier.notify(NotificationKind.BOOKING_CHANGED, updated["email"], template_params(updated))

        return updated

    async def delete_booking(self, booking_id: str) -> None:
        """Delete a booking, handing its slot back to the day first."""
        booking = await self.get_booking(booking_id)

        if booking.get("date") and booking.get("hours"):
            await self.reconciler.on_delete(booking)

        if not await self.bookings.delete(booking_id):
            raise NotFoundError("Booking not found")

        logger.info(f"Booking {booking_id} deleted")

    async def send_status_email(
        self,
        to: str,
        status: BookingStatus,
        booking_id: str,
        deposit_link: Optional[str] = None
    ) -> Optional[NotificationResult]:
        """
        Send a status email for a booking on request.

        Returns None without sending when the booking is already confirmed.
        """
        booking = await self.get_booking(booking_id)
        if booking["status"] == BookingStatus.CONFIRMED.value:
            return None

        params = template_params(booking)
        params["status"] = BookingStatus(status).value
        if deposit_link:
            params["depositLink"] = deposit_link

        return await self.notifier.notify(self._status_kind(status), to, params)

    async def _update_fields(self, booking_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        updated = await self.bookings.update(booking_id, dict(changes, updatedAt=datetime.utcnow()))
        if updated is None:
            raise NotFoundError("Booking not found")
        return updated

    async def _notify_status(self, booking: Dict[str, Any], status: str) -> NotificationResult:
        return await self.notifier.notify(self._status_kind(status), booking["email"], template_params(booking))

    @staticmethod
    def _status_kind(status: str) -> NotificationKind:
        status = BookingStatus(status)
        if status == BookingStatus.CONFIRMED:
            return NotificationKind.BOOKING_CONFIRMED
        if status == BookingStatus.DENIED:
            return NotificationKind.BOOKING_DENIED
        return NotificationKind.BOOKING_STATUS

    @staticmethod
    def _check_transition(current: str, requested: str) -> None:
        if current != BookingStatus.UNCONFIRMED.value or requested == BookingStatus.UNCONFIRMED.value:
            raise InvalidStatusTransition(current, requested)

    def _check_hours(self, hours: str) -> None:
        if hours not in self.catalogue:
            raise ValidationError(
                f"Unknown hours option '{hours}'. Choose one of: {', '.join(self.catalogue.labels)}"
            )

    async def _check_booking_window(self, date: str) -> None:
        day = await self.days.find_by_date(date)
        if day and day.get("disabled"):
            raise ValidationError(f"{date} is not available for booking")

        availability = await self.availability.get()
        max_date = availability.get("maxDate") if availability else None
        requested, limit = parse_calendar_date(date), parse_calendar_date(max_date)
        if requested and limit and requested > limit:
            raise ValidationError(f"Bookings are only accepted up to {max_date}")
