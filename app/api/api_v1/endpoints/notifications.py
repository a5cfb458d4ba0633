from fastapi import APIRouter, Depends, HTTPException, status
from app.api.deps import get_booking_service, get_notification_dispatcher
from app.schemas.notification import (
    BookingChangeEmailRequest, MessageResponse, PaymentStatusEmailRequest,
    SendEmailRequest, StatusEmailRequest
)
from app.services.booking_service import BookingService
from app.services.email_templates import NotificationKind
from app.services.notification_service import NotificationDispatcher, NotificationResult

router = APIRouter()

def _check_sent(result: NotificationResult, failure: str) -> None:
    if not result.sent:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure
        )

@router.post("/send-email", response_model=MessageResponse)
async def send_email(
    email_in: SendEmailRequest,
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """
    Send a free-form email
    """
    result = await notifier.notify(
        NotificationKind.GENERIC, email_in.to, {"subject": email_in.subject, "text": email_in.text}
    )
    _check_sent(result, "Error sending email")
    return {"message": "Email sent successfully"}

@router.post("/send-status-email", response_model=MessageResponse)
async def send_status_email(
    email_in: StatusEmailRequest,
    service: BookingService = Depends(get_booking_service)
):
    """
    Email a customer about their booking status

    Nothing is sent for bookings that are already confirmed.
    """
    result = await service.send_status_email(
        email_in.to, email_in.status, email_in.bookingId, email_in.depositLink
    )
    if result is None:
        return {"message": "Booking already confirmed; no email sent."}

    _check_sent(result, "Error sending status email")
    return {"message": f"Status email ({email_in.status.value}) sent successfully to {email_in.to}"}

@router.post("/send-booking-change-email", response_model=MessageResponse)
async def send_booking_change_email(
    email_in: BookingChangeEmailRequest,
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """
    Email a customer the new date and hours of their booking
    """
    result = await notifier.notify(
        NotificationKind.BOOKING_CHANGED,
        email_in.to,
        {"name": email_in.name, "id": email_in.id, "date": email_in.newDate, "hours": email_in.newHours}
    )
    _check_sent(result, "Error sending booking change email")
    return {"message": f"Booking change email sent successfully to {email_in.to}"}

@router.post("/send-payment-status-email", response_model=MessageResponse)
async def send_payment_status_email(
    email_in: PaymentStatusEmailRequest,
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """
    Email a customer the payment status of their booking
    """
    result = await notifier.notify(
        NotificationKind.PAYMENT_STATUS,
        email_in.to,
        {"name": email_in.name, "id": email_in.id, "paymentStatus": email_in.paymentStatus.value}
    )
    _check_sent(result, "Error sending payment status email")
    return {"message": f"Payment status email sent successfully to {email_in.to}"}
