from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class HourBlock(BaseModel):
    hour: str
    enabled: bool = True

class DayCreate(BaseModel):
    date: str = Field(..., min_length=1)
    disabled: bool = False
    hours: List[HourBlock] = []

class DayEdit(BaseModel):
    date: str = Field(..., min_length=1)
    disabled: bool

class DayHoursUpdate(BaseModel):
    date: str = Field(..., min_length=1)
    selectedHours: List[HourBlock] = []

class DayResponse(BaseModel):
    id: str
    date: str
    disabled: bool = False
    hours: List[HourBlock] = []

    model_config = ConfigDict(populate_by_name=True)

class MaxDate(BaseModel):
    maxDate: str = Field(..., min_length=1)

class AvailabilityResponse(BaseModel):
    id: Optional[str] = None
    maxDate: str
