# routers/dependencies.py
from fastapi import Depends, Header
from typing import Optional
from config import Settings, get_settings
from database import get_store
from services.auth_service import AuthService
from services.attendance_service import AttendanceService
from services.employee_service import EmployeeService
from services.holiday_service import HolidayService
from services.report_service import ReportService
from utils.time_utils import SystemClock


def get_clock():
    return SystemClock()


def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return ""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def get_auth_service(store=Depends(get_store), settings: Settings = Depends(get_settings)):
    return AuthService(store, settings)


def get_attendance_service(
    store=Depends(get_store),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
    clock=Depends(get_clock),
):
    return AttendanceService(store, auth, settings, clock)


def get_holiday_service(store=Depends(get_store), auth: AuthService = Depends(get_auth_service)):
    return HolidayService(store, auth)


def get_employee_service(store=Depends(get_store), auth: AuthService = Depends(get_auth_service)):
    return EmployeeService(store, auth)


def get_report_service(
    store=Depends(get_store),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
    clock=Depends(get_clock),
):
    return ReportService(store, auth, settings, clock)
