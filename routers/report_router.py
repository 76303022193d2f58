# routers/report_router.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from typing import Optional
from routers.dependencies import bearer_token, get_auth_service, get_report_service
from services.auth_service import AuthService
from services.report_service import ReportService
from utils.exceptions import AttendanceError

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/monthly")
async def api_export_monthly_report(
    year: Optional[int] = None,
    month: Optional[int] = None,
    uid: Optional[str] = None,
    token: str = Depends(bearer_token),
    service: ReportService = Depends(get_report_service),
):
    """Monthly report as a base64-encoded workbook. ``month`` is 0-indexed."""
    return await service.export_monthly_report(token, year, month, uid)


@router.get("/monthly/download")
async def api_download_monthly_report(
    year: Optional[int] = None,
    month: Optional[int] = None,
    uid: Optional[str] = None,
    token: str = Depends(bearer_token),
    auth: AuthService = Depends(get_auth_service),
    service: ReportService = Depends(get_report_service),
):
    try:
        await auth.require_admin(token)
        filename, file_stream = await service.build_report_file(year, month, uid)
    except AttendanceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return StreamingResponse(
        file_stream,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )
