from fastapi import APIRouter, Depends
from typing import List
from app.api.deps import get_day_service
from app.schemas.day import (
    AvailabilityResponse, DayCreate, DayEdit, DayHoursUpdate, DayResponse, MaxDate
)
from app.services.day_service import DayService

router = APIRouter()

@router.get("/days", response_model=List[DayResponse])
async def list_days(service: DayService = Depends(get_day_service)):
    """
    Get every day record
    """
    return await service.list_days()

@router.get("/blackoutDays", response_model=List[DayResponse])
async def list_blackout_days(service: DayService = Depends(get_day_service)):
    """
    Get days that are closed for booking
    """
    return await service.list_blackout_days()

@router.get("/days/{date}", response_model=DayResponse)
async def get_day(date: str, service: DayService = Depends(get_day_service)):
    """
    Get the availability record for a date
    """
    return await service.get_day(date)

@router.post("/days", response_model=DayResponse)
async def create_day(day_in: DayCreate, service: DayService = Depends(get_day_service)):
    """
    Create a day record. Fails if the date already has one.
    """
    return await service.create_day(day_in)

@router.post("/editDay", response_model=DayResponse)
async def edit_day(day_edit: DayEdit, service: DayService = Depends(get_day_service)):
    """
    Open or black out a day
    """
    return await service.edit_day(day_edit)

@router.post("/updateOrCreateDay", response_model=DayResponse)
async def update_or_create_day(
    day_update: DayHoursUpdate,
    service: DayService = Depends(get_day_service)
):
    """
    Set the bookable hours of a day
    """
    return await service.update_or_create_day(day_update)

@router.get("/getMaxDate", response_model=MaxDate)
async def get_max_date(service: DayService = Depends(get_day_service)):
    """
    Get the furthest date clients may book
    """
    return {"maxDate": await service.get_max_date()}

@router.post("/updateMaxDate", response_model=AvailabilityResponse)
async def update_max_date(max_date: MaxDate, service: DayService = Depends(get_day_service)):
    """
    Set the furthest date clients may book
    """
    return await service.update_max_date(max_date.maxDate)
