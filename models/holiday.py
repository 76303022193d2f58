# models/holiday.py
from pydantic import BaseModel
from enum import Enum


class HolidayType(str, Enum):
    HOLIDAY = "holiday"
    WORKING = "working"


class HolidayCreate(BaseModel):
    date: str  # YYYY-MM-DD
    name: str
    type: HolidayType = HolidayType.HOLIDAY
