from typing import Any, Dict, Tuple
from enum import Enum

class NotificationKind(str, Enum):
    BOOKING_RECEIVED = "booking_received"
    NEW_BOOKING = "new_booking"
    BOOKING_CONFIRMED = "booking_confirmed"
    BOOKING_DENIED = "booking_denied"
    BOOKING_STATUS = "booking_status"
    BOOKING_CHANGED = "booking_changed"
    PAYMENT_STATUS = "payment_status"
    GENERIC = "generic"

def booking_details(params: Dict[str, Any]) -> str:
    """Plain-text block listing a booking's fields."""
    lines = [
        "Booking Details:",
        "----------------",
        f"Name: {params.get('name', '')}",
        f"Email: {params.get('email', '')}",
        f"Phone Number: {params.get('phoneNumber', '')}",
        f"Message: {params.get('message') or ''}",
        f"How Did You Hear: {params.get('howDidYouHear') or ''}",
        f"Date: {params.get('date', '')}",
        f"Hours: {params.get('hours', '')}",
    ]
    return "\n".join(lines)

def _booking_received(params: Dict[str, Any]) -> Tuple[str, str]:
    text = (
        f"Hi {params.get('name', '')},\n\n"
        "Thanks for your booking request! We have received it and will get back to you "
        "once it has been reviewed.\n\n"
        f"{booking_details(params)}"
    )
    return "We received your booking request", text

def _new_booking(params: Dict[str, Any]) -> Tuple[str, str]:
    text = (
        "A new booking request has been submitted.\n\n"
        f"{booking_details(params)}\n\n"
        f"Review it at {params.get('baseUrl', '')}/admin/bookings/{params.get('id', '')}"
    )
    return f"New booking request from {params.get('name', '')}", text

def _booking_confirmed(params: Dict[str, Any]) -> Tuple[str, str]:
    text = (
        f"Hi {params.get('name', '')},\n\n"
        f"Your booking for {params.get('date', '')} ({params.get('hours', '')}) has been confirmed."
    )
    if params.get("depositLink"):
        text += f"\n\nPlease secure your session by paying the deposit here: {params['depositLink']}"
    text += f"\n\nBooking reference: {params.get('id', '')}"
    return "Your booking is confirmed", text

def _booking_denied(params: Dict[str, Any]) -> Tuple[str, str]:
    text = (
        f"Hi {params.get('name', '')},\n\n"
        f"Unfortunately we are unable to accommodate your booking for {params.get('date', '')} "
        f"({params.get('hours', '')}). Feel free to pick another date at {params.get('baseUrl', '')}.\n\n"
        f"Booking reference: {params.get('id', '')}"
    )
    return "Update on your booking request", text

def _booking_status(params: Dict[str, Any]) -> Tuple[str, str]:
    text = (
        f"Hi {params.get('name', '')},\n\n"
        f"The status of your booking is now: {params.get('status', '')}.\n\n"
        f"Booking reference: {params.get('id', '')}"
    )
    return "Booking status update", text

def _booking_changed(params: Dict[str, Any]) -> Tuple[str, str]:
    text = (
        f"Hi {params.get('name', '')},\n\n"
        "Your booking has been changed. The new details are:\n\n"
        f"Date: {params.get('date', '')}\n"
        f"Hours: {params.get('hours', '')}\n\n"
        f"Booking reference: {params.get('id', '')}"
    )
    return "Your booking has been updated", text

def _payment_status(params: Dict[str, Any]) -> Tuple[str, str]:
    text = (
        f"Hi {params.get('name', '')},\n\n"
        f"The payment status of your booking is now: {params.get('paymentStatus', '')}.\n\n"
        f"Booking reference: {params.get('id', '')}"
    )
    return "Payment status update", text

def _generic(params: Dict[str, Any]) -> Tuple[str, str]:
    return params.get("subject", ""), params.get("text", "")

TEMPLATES = {
    NotificationKind.BOOKING_RECEIVED: _booking_received,
    NotificationKind.NEW_BOOKING: _new_booking,
    NotificationKind.BOOKING_CONFIRMED: _booking_confirmed,
    NotificationKind.BOOKING_DENIED: _booking_denied,
    NotificationKind.BOOKING_STATUS: _booking_status,
    NotificationKind.BOOKING_CHANGED: _booking_changed,
    NotificationKind.PAYMENT_STATUS: _payment_status,
    NotificationKind.GENERIC: _generic,
}

def render(kind: NotificationKind, params: Dict[str, Any]) -> Tuple[str, str]:
    """Return (subject, text) for a notification."""
    return TEMPLATES[NotificationKind(kind)](params)
