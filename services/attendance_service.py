# services/attendance_service.py
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Tuple
from zoneinfo import ZoneInfo

from config import Settings
from database import ATTENDANCE
from models.attendance_model import AttendanceStatus, OvertimeDecision, OvertimeStatus
from services.actions import action
from services.auth_service import AuthService
from utils.exceptions import (
    AlreadyPunchedOut,
    DuplicatePunchIn,
    MalformedInput,
    NoPunchInRecord,
    RecordNotFound,
)
from utils.geo_utils import validate_location
from utils.shift_utils import DEFAULT_SHIFT, ShiftConfig, resolve_shift
from utils.time_utils import (
    SystemClock,
    instant_from_hhmm,
    local_date,
    parse_date_str,
    format_duration,
    whole_minutes,
    zoned_instant,
)

logger = logging.getLogger(__name__)


def record_key(uid: str, date_str: str) -> str:
    return f"{uid}_{date_str}"


def compute_lateness(shift: ShiftConfig, day: date, punch_in: datetime, tz: ZoneInfo) -> Tuple[int, datetime]:
    """
    Late minutes and the required punch-out instant for a punch-in on ``day``.

    Lateness is counted from shift start, but only once the grace period has
    passed. Late minutes are added on top of the shift end.
    """
    office_start = zoned_instant(day, shift.start_hour, shift.start_minute, tz)
    grace_end = office_start + timedelta(minutes=shift.grace_period_minutes)

    late_minutes = 0
    if punch_in > grace_end:
        late_minutes = max(0, whole_minutes(punch_in - office_start))

    required = office_start + timedelta(hours=shift.shift_duration_hours, minutes=late_minutes)
    return late_minutes, required


def overtime_after(punch_out: datetime, required: datetime) -> int:
    return max(0, whole_minutes(punch_out - required))


def punch_out_outcome(now: datetime, required: datetime, force_half_day: bool) -> Tuple[str, int, str]:
    """Status, overtime minutes and overtime status for a live punch-out."""
    if now < required:
        # An unconfirmed early exit counts as absent; the client has to ask
        # before sending it.
        status = AttendanceStatus.HALF_DAY if force_half_day else AttendanceStatus.ABSENT
    else:
        status = AttendanceStatus.PRESENT

    overtime = overtime_after(now, required)
    overtime_status = OvertimeStatus.PENDING if overtime > 0 else OvertimeStatus.NONE
    return status.value, overtime, overtime_status.value


def edited_outcome(
    shift: ShiftConfig, punch_in: datetime, punch_out: datetime, required: datetime
) -> Tuple[str, int, str]:
    """
    Status and overtime after an admin edit.

    Unlike a live punch-out, the half-day threshold is the raw shift length
    rather than the required punch-out, and any overtime counts as approved.
    """
    worked = (punch_out - punch_in).total_seconds() / 60
    if worked < shift.shift_duration_minutes:
        status = AttendanceStatus.HALF_DAY
    else:
        status = AttendanceStatus.PRESENT

    overtime = overtime_after(punch_out, required)
    overtime_status = OvertimeStatus.APPROVED if overtime > 0 else OvertimeStatus.NONE
    return status.value, overtime, overtime_status.value


def _punch_in_order(record: Dict[str, Any]):
    punch_in_time = (record.get("punch_in") or {}).get("time")
    if punch_in_time is None:
        return (1, 0)
    return (0, punch_in_time.timestamp())


class AttendanceService:
    """Punch-in/punch-out for employees plus the admin record maintenance actions."""

    def __init__(self, store, auth: AuthService, settings: Settings, clock=None):
        self.store = store
        self.auth = auth
        self.settings = settings
        self.clock = clock or SystemClock()
        self.tz = ZoneInfo(settings.time_zone)

    def _check_location(self, lat: float, lng: float) -> float:
        return validate_location(
            lat,
            lng,
            self.settings.office_lat,
            self.settings.office_lng,
            self.settings.max_distance_meters,
        )

    async def _get_record(self, key: str) -> Dict[str, Any]:
        record = await self.store.get(ATTENDANCE, key)
        if not record:
            raise RecordNotFound()
        return record

    async def _shift_label_for(self, record: Dict[str, Any]) -> str:
        # Records written before the shift was snapshotted fall back to the profile.
        if record.get("shift_start"):
            return record["shift_start"]
        profile = await self.auth.get_profile(record["uid"]) or {}
        return profile.get("shift") or DEFAULT_SHIFT

    @action
    async def punch_in(self, token: str, lat: float, lng: float):
        identity = self.auth.verify_token(token)
        profile = await self.auth.get_profile(identity.uid) or {}
        name = profile.get("name") or identity.name or "Employee"
        email = profile.get("email") or identity.email or "No Email"
        shift_label = profile.get("shift") or DEFAULT_SHIFT

        self._check_location(lat, lng)

        now = self.clock.now()
        day = local_date(now, self.tz)
        date_str = day.isoformat()
        key = record_key(identity.uid, date_str)

        if await self.store.get(ATTENDANCE, key):
            raise DuplicatePunchIn()

        shift = resolve_shift(shift_label)
        late_minutes, required = compute_lateness(shift, day, now, self.tz)

        doc = {
            "uid": identity.uid,
            "date": date_str,
            "name": name,
            "email": email,
            "shift_start": shift_label,
            "punch_in": {"time": now, "lat": lat, "lng": lng},
            "punch_out": None,
            "required_punch_out": required,
            "late_minutes": late_minutes,
            "status": AttendanceStatus.WORKING.value,
            "overtime_minutes": 0,
            "overtime_status": OvertimeStatus.NONE.value,
        }
        # A concurrent punch-in may have won since the check above.
        if not await self.store.create(ATTENDANCE, key, doc):
            raise DuplicatePunchIn()

        logger.info("Punch in uid=%s date=%s late=%d", identity.uid, date_str, late_minutes)
        return {
            "message": "Punched in successfully.",
            "record_id": key,
            "date": date_str,
            "late_minutes": late_minutes,
            "late_display": format_duration(late_minutes),
            "required_punch_out": required,
        }

    @action
    async def punch_out(self, token: str, lat: float, lng: float, force_half_day: bool = False):
        identity = self.auth.verify_token(token)
        self._check_location(lat, lng)

        now = self.clock.now()
        date_str = local_date(now, self.tz).isoformat()
        key = record_key(identity.uid, date_str)

        record = await self.store.get(ATTENDANCE, key)
        if not record:
            raise NoPunchInRecord()
        if record.get("punch_out"):
            raise AlreadyPunchedOut()

        required = record["required_punch_out"]
        status, overtime, overtime_status = punch_out_outcome(now, required, force_half_day)

        fields = {
            "punch_out": {"time": now, "lat": lat, "lng": lng},
            "status": status,
            "overtime_minutes": overtime,
            "overtime_status": overtime_status,
        }
        # Only the first punch-out lands; a concurrent one finds punch_out already set.
        if not await self.store.update(ATTENDANCE, key, fields, where={"punch_out": None}):
            raise AlreadyPunchedOut()

        logger.info("Punch out uid=%s date=%s status=%s overtime=%d", identity.uid, date_str, status, overtime)
        return {
            "message": f"Punched out. Status: {status}",
            "status": status,
            "overtime_minutes": overtime,
            "overtime_display": format_duration(overtime),
            "overtime_status": overtime_status,
        }

    @action
    async def update_record(
        self,
        token: str,
        record_id: str,
        punch_in_time: Optional[str] = None,
        punch_out_time: Optional[str] = None,
    ):
        """Admin edit of punch times; every derived field is recomputed."""
        await self.auth.require_admin(token)
        record = await self._get_record(record_id)
        day = parse_date_str(record["date"])

        punch_in = record.get("punch_in") or {}
        punch_out = record.get("punch_out") or {}

        in_time = instant_from_hhmm(day, punch_in_time, self.tz) if punch_in_time else punch_in.get("time")
        out_time = instant_from_hhmm(day, punch_out_time, self.tz) if punch_out_time else punch_out.get("time")

        if in_time is None:
            raise MalformedInput("Record has no punch-in time; provide one")
        if out_time is not None and out_time < in_time:
            raise MalformedInput("Punch-out time cannot be before punch-in time")

        shift_label = await self._shift_label_for(record)
        shift = resolve_shift(shift_label)
        late_minutes, required = compute_lateness(shift, day, in_time, self.tz)

        updates: Dict[str, Any] = {
            "late_minutes": late_minutes,
            "required_punch_out": required,
        }
        if punch_in_time:
            updates["punch_in"] = {**punch_in, "time": in_time}
        if punch_out_time:
            updates["punch_out"] = {
                "time": out_time,
                "lat": punch_out.get("lat") or 0,
                "lng": punch_out.get("lng") or 0,
            }

        if out_time is not None:
            status, overtime, overtime_status = edited_outcome(shift, in_time, out_time, required)
            updates["status"] = status
            updates["overtime_minutes"] = overtime
            updates["overtime_status"] = overtime_status
        else:
            updates["status"] = AttendanceStatus.WORKING.value

        await self.store.update(ATTENDANCE, record_id, updates)
        logger.info("Record %s edited (shift %s): %s", record_id, shift_label, updates["status"])
        return {"message": "Record updated successfully", "status": updates["status"]}

    @action
    async def delete_record(self, token: str, record_id: str):
        await self.auth.require_admin(token)
        if not await self.store.delete(ATTENDANCE, record_id):
            raise RecordNotFound()
        logger.info("Record %s deleted", record_id)
        return {"message": "Record deleted successfully"}

    @action
    async def review_overtime(self, token: str, record_id: str, decision: str):
        await self.auth.require_admin(token)
        try:
            decision = OvertimeDecision(decision).value
        except ValueError:
            raise MalformedInput(f"Invalid overtime decision '{decision}'")

        record = await self._get_record(record_id)
        if record.get("overtime_status", OvertimeStatus.NONE.value) == OvertimeStatus.NONE.value:
            raise MalformedInput("Record has no overtime to review")

        await self.store.update(ATTENDANCE, record_id, {"overtime_status": decision})
        logger.info("Overtime on %s %s", record_id, decision)
        return {"message": f"Overtime {decision}"}

    @action
    async def get_today_record(self, token: str):
        identity = self.auth.verify_token(token)
        date_str = local_date(self.clock.now(), self.tz).isoformat()
        record = await self.store.get(ATTENDANCE, record_key(identity.uid, date_str))
        return {"date": date_str, "record": record}

    @action
    async def list_my_records(self, token: str, limit: int = 31):
        identity = self.auth.verify_token(token)
        records = await self.store.find(ATTENDANCE, {"uid": identity.uid}, sort="date", descending=True, limit=limit)
        return {"records": records}

    @action
    async def list_records_for_date(self, token: str, date_str: str):
        await self.auth.require_admin(token)
        parse_date_str(date_str)
        records = await self.store.find(ATTENDANCE, {"date": date_str})
        records.sort(key=_punch_in_order)
        return {"date": date_str, "records": records}
