# models/attendance_model.py
from pydantic import BaseModel
from typing import Optional
from enum import Enum


class AttendanceStatus(str, Enum):
    WORKING = "Working"
    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"


class OvertimeStatus(str, Enum):
    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OvertimeDecision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


class PunchInRequest(BaseModel):
    lat: float
    lng: float


class PunchOutRequest(BaseModel):
    lat: float
    lng: float
    force_half_day: bool = False


class AttendanceEdit(BaseModel):
    punch_in_time: Optional[str] = None  # "HH:mm", local time on the record's date
    punch_out_time: Optional[str] = None


class OvertimeReview(BaseModel):
    decision: OvertimeDecision
