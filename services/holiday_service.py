# services/holiday_service.py
import logging

from database import HOLIDAYS
from models.holiday import HolidayType
from services.actions import action
from services.auth_service import AuthService
from utils.exceptions import MalformedInput, RecordNotFound
from utils.time_utils import parse_date_str

logger = logging.getLogger(__name__)


class HolidayService:
    """Admin-maintained overrides of the default weekend calendar."""

    def __init__(self, store, auth: AuthService):
        self.store = store
        self.auth = auth

    @action
    async def upsert_holiday(self, token: str, date_str: str, name: str, holiday_type: str = HolidayType.HOLIDAY.value):
        await self.auth.require_admin(token)
        parse_date_str(date_str)
        try:
            holiday_type = HolidayType(holiday_type).value
        except ValueError:
            raise MalformedInput(f"Invalid holiday type '{holiday_type}'")

        await self.store.put(HOLIDAYS, date_str, {"date": date_str, "name": name, "type": holiday_type})
        logger.info("Holiday %s set to %s (%s)", date_str, name, holiday_type)
        return {"message": "Holiday added/updated"}

    @action
    async def delete_holiday(self, token: str, date_str: str):
        await self.auth.require_admin(token)
        if not await self.store.delete(HOLIDAYS, date_str):
            raise RecordNotFound("Holiday not found")
        logger.info("Holiday %s deleted", date_str)
        return {"message": "Holiday deleted"}

    @action
    async def list_holidays(self, token: str):
        self.auth.verify_token(token)
        holidays = await self.store.find(HOLIDAYS, sort="date", descending=True)
        return {"holidays": holidays}
