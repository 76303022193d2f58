# services/employee_service.py
import logging
from typing import Any, Dict, List

from database import USERS
from models.employee import EmployeeProfileUpdate
from services.actions import action
from services.auth_service import AuthService
from utils.exceptions import MalformedInput
from utils.shift_utils import is_valid_shift_label

logger = logging.getLogger(__name__)


async def list_profiles(store) -> List[Dict[str, Any]]:
    """All employee profiles ordered by name."""
    profiles = await store.find(USERS)
    profiles.sort(key=lambda p: (p.get("name") or "").lower())
    return profiles


class EmployeeService:
    """The profile store: name, email, role and shift label per uid."""

    def __init__(self, store, auth: AuthService):
        self.store = store
        self.auth = auth

    @action
    async def get_my_profile(self, token: str):
        identity = self.auth.verify_token(token)
        profile = await self.auth.get_profile(identity.uid)
        return {"profile": profile}

    @action
    async def list_employees(self, token: str):
        await self.auth.require_admin(token)
        return {"employees": await list_profiles(self.store)}

    @action
    async def upsert_profile(self, token: str, uid: str, data: EmployeeProfileUpdate):
        await self.auth.require_admin(token)
        if not is_valid_shift_label(data.shift):
            raise MalformedInput(f"Invalid shift '{data.shift}', expected HH:MM")

        doc = {
            "name": data.name,
            "email": data.email,
            "role": data.role.value,
            "shift": data.shift.strip(),
        }
        await self.store.put(USERS, uid, doc)
        logger.info("Profile %s saved (role=%s, shift=%s)", uid, doc["role"], doc["shift"])
        return {"message": "Employee profile saved", "uid": uid}
