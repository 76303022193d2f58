# services/report_service.py
import base64
import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from config import Settings
from database import ATTENDANCE, HOLIDAYS, USERS
from models.attendance_model import AttendanceStatus
from models.report import EmployeeSheet, Highlight, MonthlyReport, ReportRow
from services.actions import action
from services.attendance_service import record_key
from services.auth_service import AuthService
from services.employee_service import list_profiles
from utils.calendar_utils import dates_between, pay_period, resolve_day
from utils.excel_utils import build_report_workbook
from utils.exceptions import RecordNotFound
from utils.time_utils import SystemClock, display_time

logger = logging.getLogger(__name__)


def classify_row(day: date, record: Optional[Dict[str, Any]], overrides: Dict[str, Dict], tz: ZoneInfo) -> ReportRow:
    """One ledger row: the stored attendance for ``day`` against the expected calendar."""
    is_holiday, label = resolve_day(day, overrides)
    row = ReportRow(date=day.isoformat(), day=day.strftime("%a"))

    if record is None:
        if is_holiday:
            row.status = label
            row.highlight = Highlight.HOLIDAY
        else:
            row.status = AttendanceStatus.ABSENT.value
            row.highlight = Highlight.ABSENT
        return row

    punch_in = record.get("punch_in") or {}
    punch_out = record.get("punch_out") or {}
    row.punch_in = display_time(punch_in.get("time"), tz)
    row.punch_out = display_time(punch_out.get("time"), tz)
    row.late_minutes = record.get("late_minutes") or 0
    row.overtime_minutes = record.get("overtime_minutes") or 0
    row.status = record.get("status") or AttendanceStatus.PRESENT.value

    if is_holiday:
        row.status = f"{label} (Worked)"
        row.highlight = Highlight.OVERTIME
    elif row.overtime_minutes > 0:
        row.highlight = Highlight.OVERTIME
    elif row.status == AttendanceStatus.HALF_DAY.value:
        row.highlight = Highlight.HALF_DAY
    elif row.status == AttendanceStatus.ABSENT.value:
        row.highlight = Highlight.ABSENT
    return row


def report_filename(start: date, end: date, employee_name: Optional[str] = None) -> str:
    if employee_name is not None:
        safe_name = re.sub(r"\s+", "_", employee_name)
        return f"{safe_name}_Attendance_{start:%b}.xlsx"
    return f"Attendance_Report_{start:%b_%d}_to_{end:%b_%d}.xlsx"


class ReportService:
    """Builds the 21st-to-20th pay-period ledger for one or all employees."""

    def __init__(self, store, auth: AuthService, settings: Settings, clock=None):
        self.store = store
        self.auth = auth
        self.clock = clock or SystemClock()
        self.tz = ZoneInfo(settings.time_zone)

    async def _employees(self, uid: Optional[str]) -> List[Dict[str, Any]]:
        if uid:
            profile = await self.store.get(USERS, uid)
            if not profile:
                raise RecordNotFound("Employee not found")
            return [profile]
        return await list_profiles(self.store)

    async def generate_monthly_report(self, year: int, month: int, uid: Optional[str] = None) -> MonthlyReport:
        start, end = pay_period(year, month)
        days = dates_between(start, end)

        holidays = await self.store.find_range(HOLIDAYS, "date", start.isoformat(), end.isoformat())
        overrides = {h["date"]: h for h in holidays}

        employees = await self._employees(uid)
        sheets = []
        for employee in employees:
            keys = [record_key(employee["id"], d.isoformat()) for d in days]
            records = await self.store.get_many(ATTENDANCE, keys)
            rows = [classify_row(d, records.get(k), overrides, self.tz) for d, k in zip(days, keys)]
            sheets.append(EmployeeSheet(uid=employee["id"], name=employee.get("name") or "Employee", rows=rows))

        name = (employees[0].get("name") or "Employee") if uid else None
        report = MonthlyReport(
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            filename=report_filename(start, end, name),
            sheets=sheets,
        )
        logger.info("Monthly report %s..%s built for %d employee(s)", start, end, len(sheets))
        return report

    def default_period(self):
        today = self.clock.now().astimezone(self.tz)
        return today.year, today.month - 1

    async def build_report_file(self, year: Optional[int] = None, month: Optional[int] = None, uid: Optional[str] = None):
        default_year, default_month = self.default_period()
        year = default_year if year is None else year
        month = default_month if month is None else month

        report = await self.generate_monthly_report(year, month, uid)
        return report.filename, build_report_workbook(report)

    @action
    async def export_monthly_report(
        self, token: str, year: Optional[int] = None, month: Optional[int] = None, uid: Optional[str] = None
    ):
        await self.auth.require_admin(token)
        filename, stream = await self.build_report_file(year, month, uid)
        return {
            "filename": filename,
            "data": base64.b64encode(stream.getvalue()).decode("ascii"),
        }
