from fastapi import APIRouter, Depends, status
from typing import List
from app.api.deps import get_booking_service
from app.schemas.booking import (
    BookingCreate, BookingCreatedResponse, BookingReschedule,
    BookingRescheduledResponse, BookingResponse, BookingUpdate
)
from app.schemas.notification import MessageResponse
from app.services.booking_service import BookingService

router = APIRouter()

@router.post("", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_new_booking(
    booking_in: BookingCreate,
    service: BookingService = Depends(get_booking_service)
):
    """
    Submit a booking request

    The booking starts out unconfirmed. The customer gets an acknowledgment
    email and the studio an alert; `emailStatus` reports each separately.
    """
    return await service.create_booking(booking_in)

@router.get("", response_model=List[BookingResponse])
async def list_bookings(service: BookingService = Depends(get_booking_service)):
    """
    Get all bookings
    """
    return await service.list_bookings()

@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service)
):
    """
    Get booking details
    """
    return await service.get_booking(booking_id)

@router.put("/datehour/{booking_id}", response_model=BookingRescheduledResponse)
async def reschedule_booking(
    booking_id: str,
    reschedule_data: BookingReschedule,
    service: BookingService = Depends(get_booking_service)
):
    """
    Move a booking to a new date and hours option

    - **date**: New date for the booking
    - **hours**: New hours option from the catalogue
    """
    booking = await service.reschedule_booking(booking_id, reschedule_data)
    return {"message": "Booking updated successfully", "booking": booking}

@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    booking_update: BookingUpdate,
    service: BookingService = Depends(get_booking_service)
):
    """
    Update booking status and payment details

    - **status**: `confirmed` or `denied` (only from `unconfirmed`)
    - **paymentStatus**: `unpaid`, `deposit paid` or `paid`
    - **paymentMethod**: `none`, `venmo`, `cashapp`, `zelle` or `cash`
    """
    return await service.update_booking(booking_id, booking_update)

@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service)
):
    """
    Delete a booking and give its slot back to the day
    """
    await service.delete_booking(booking_id)
    return {"message": "Booking deleted successfully"}
