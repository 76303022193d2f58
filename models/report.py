# models/report.py
from pydantic import BaseModel
from typing import List, Optional
from enum import Enum


class Highlight(str, Enum):
    OVERTIME = "overtime"
    HALF_DAY = "half-day"
    ABSENT = "absent"
    HOLIDAY = "holiday"


class ReportRow(BaseModel):
    date: str
    day: str
    punch_in: str = "-"
    punch_out: str = "-"
    late_minutes: int = 0
    overtime_minutes: int = 0
    status: str = ""
    highlight: Optional[Highlight] = None


class EmployeeSheet(BaseModel):
    uid: str
    name: str
    rows: List[ReportRow]


class MonthlyReport(BaseModel):
    start_date: str
    end_date: str
    filename: str
    sheets: List[EmployeeSheet]
