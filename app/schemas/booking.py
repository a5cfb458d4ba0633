from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict
from enum import Enum

class BookingStatus(str, Enum):
    UNCONFIRMED = "unconfirmed"
    CONFIRMED = "confirmed"
    DENIED = "denied"
    
class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    DEPOSIT_PAID = "deposit paid"
    PAID = "paid"

class PaymentMethod(str, Enum):
    NONE = "none"
    VENMO = "venmo"
    CASHAPP = "cashapp"
    ZELLE = "zelle"
    CASH = "cash"

class BookingCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phoneNumber: str = Field(..., min_length=1)
    message: Optional[str] = None
    howDidYouHear: Optional[str] = None
    date: str = Field(..., min_length=1)
    hours: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("Invalid email address")
        return value
    
class BookingUpdate(BaseModel):
    status: Optional[BookingStatus] = None
    paymentStatus: Optional[PaymentStatus] = None
    paymentMethod: Optional[PaymentMethod] = None

class BookingReschedule(BaseModel):
    date: str = Field(..., min_length=1)
    hours: str = Field(..., min_length=1)

class BookingResponse(BaseModel):
    id: str
    name: str
    email: str
    phoneNumber: str
    message: Optional[str] = None
    howDidYouHear: Optional[str] = None
    date: str
    hours: str
    status: BookingStatus = BookingStatus.UNCONFIRMED
    paymentStatus: PaymentStatus = PaymentStatus.UNPAID
    paymentMethod: PaymentMethod = PaymentMethod.NONE
    
    model_config = ConfigDict(populate_by_name=True)

class EmailChannelStatus(BaseModel):
    sent: bool
    error: Optional[str] = None

class BookingCreatedResponse(BaseModel):
    booking: BookingResponse
    emailStatus: Dict[str, EmailChannelStatus]
    message: str

class BookingRescheduledResponse(BaseModel):
    message: str
    booking: BookingResponse
