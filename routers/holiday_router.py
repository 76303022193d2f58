# routers/holiday_router.py
from fastapi import APIRouter, Depends
from models.holiday import HolidayCreate
from routers.dependencies import bearer_token, get_holiday_service
from services.holiday_service import HolidayService

router = APIRouter(prefix="/holidays", tags=["holidays"])


@router.get("")
async def api_list_holidays(token: str = Depends(bearer_token), service: HolidayService = Depends(get_holiday_service)):
    return await service.list_holidays(token)


@router.post("")
async def api_upsert_holiday(
    holiday: HolidayCreate,
    token: str = Depends(bearer_token),
    service: HolidayService = Depends(get_holiday_service),
):
    return await service.upsert_holiday(token, holiday.date, holiday.name, holiday.type.value)


@router.delete("/{date_str}")
async def api_delete_holiday(
    date_str: str,
    token: str = Depends(bearer_token),
    service: HolidayService = Depends(get_holiday_service),
):
    return await service.delete_holiday(token, date_str)
