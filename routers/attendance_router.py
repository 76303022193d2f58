# routers/attendance_router.py
from fastapi import APIRouter, Depends
from models.attendance_model import PunchInRequest, PunchOutRequest, AttendanceEdit, OvertimeReview
from routers.dependencies import bearer_token, get_attendance_service
from services.attendance_service import AttendanceService

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/punch-in")
async def api_punch_in(
    body: PunchInRequest,
    token: str = Depends(bearer_token),
    service: AttendanceService = Depends(get_attendance_service),
):
    return await service.punch_in(token, body.lat, body.lng)


@router.post("/punch-out")
async def api_punch_out(
    body: PunchOutRequest,
    token: str = Depends(bearer_token),
    service: AttendanceService = Depends(get_attendance_service),
):
    return await service.punch_out(token, body.lat, body.lng, body.force_half_day)


@router.get("/today")
async def api_today(token: str = Depends(bearer_token), service: AttendanceService = Depends(get_attendance_service)):
    return await service.get_today_record(token)


@router.get("/me")
async def api_my_records(
    limit: int = 31,
    token: str = Depends(bearer_token),
    service: AttendanceService = Depends(get_attendance_service),
):
    return await service.list_my_records(token, limit)


@router.get("/date/{date_str}")
async def api_records_for_date(
    date_str: str,
    token: str = Depends(bearer_token),
    service: AttendanceService = Depends(get_attendance_service),
):
    return await service.list_records_for_date(token, date_str)


@router.put("/{record_id}")
async def api_update_record(
    record_id: str,
    body: AttendanceEdit,
    token: str = Depends(bearer_token),
    service: AttendanceService = Depends(get_attendance_service),
):
    return await service.update_record(token, record_id, body.punch_in_time, body.punch_out_time)


@router.delete("/{record_id}")
async def api_delete_record(
    record_id: str,
    token: str = Depends(bearer_token),
    service: AttendanceService = Depends(get_attendance_service),
):
    return await service.delete_record(token, record_id)


@router.post("/{record_id}/overtime")
async def api_review_overtime(
    record_id: str,
    body: OvertimeReview,
    token: str = Depends(bearer_token),
    service: AttendanceService = Depends(get_attendance_service),
):
    return await service.review_overtime(token, record_id, body.decision.value)
