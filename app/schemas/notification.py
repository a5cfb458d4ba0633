from pydantic import BaseModel, Field
from typing import Optional
from app.schemas.booking import BookingStatus, PaymentStatus

class SendEmailRequest(BaseModel):
    to: str = Field(..., min_length=3)
    subject: str = Field(..., min_length=1)
    text: str

class StatusEmailRequest(BaseModel):
    to: str = Field(..., min_length=3)
    status: BookingStatus
    bookingId: str
    depositLink: Optional[str] = None

class BookingChangeEmailRequest(BaseModel):
    to: str = Field(..., min_length=3)
    name: str
    id: str
    newDate: str
    newHours: str

class PaymentStatusEmailRequest(BaseModel):
    to: str = Field(..., min_length=3)
    name: str
    id: str
    paymentStatus: PaymentStatus

class MessageResponse(BaseModel):
    message: str
