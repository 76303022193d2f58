import asyncio
import copy
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import jwt
import pytest

from config import Settings
from database import USERS
from services.attendance_service import AttendanceService
from services.auth_service import AuthService
from services.employee_service import EmployeeService
from services.holiday_service import HolidayService
from services.report_service import ReportService
from utils.time_utils import FixedClock

IST = ZoneInfo("Asia/Kolkata")
OFFICE = (12.9716, 77.5946)
SECRET = "attendance-test-secret-0123456789abcdef"


def run(coro):
    return asyncio.run(coro)


def ist(year, month, day, hour=0, minute=0, second=0):
    return datetime(year, month, day, hour, minute, second, tzinfo=IST)


class InMemoryStore:
    """Same contract as database.MongoStore, backed by dicts."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _col(self, name):
        return self.collections.setdefault(name, {})

    @staticmethod
    def _out(key, doc):
        out = copy.deepcopy(doc)
        out["id"] = key
        return out

    async def get(self, collection, key) -> Optional[Dict[str, Any]]:
        doc = self._col(collection).get(key)
        return None if doc is None else self._out(key, doc)

    async def create(self, collection, key, doc) -> bool:
        col = self._col(collection)
        if key in col:
            return False
        col[key] = copy.deepcopy(doc)
        return True

    async def put(self, collection, key, doc):
        self._col(collection)[key] = copy.deepcopy(doc)

    async def update(self, collection, key, fields, where=None) -> bool:
        col = self._col(collection)
        if key not in col:
            return False
        if where and not all(col[key].get(f) == v for f, v in where.items()):
            return False
        col[key].update(copy.deepcopy(fields))
        return True

    async def delete(self, collection, key) -> bool:
        return self._col(collection).pop(key, None) is not None

    async def find(self, collection, filters=None, sort=None, descending=False, limit=0):
        filters = filters or {}
        docs = [
            self._out(k, d)
            for k, d in self._col(collection).items()
            if all(d.get(f) == v for f, v in filters.items())
        ]
        if sort:
            docs.sort(key=lambda d: d.get(sort), reverse=descending)
        if limit:
            docs = docs[:limit]
        return docs

    async def find_range(self, collection, field, start, end):
        docs = [self._out(k, d) for k, d in self._col(collection).items() if start <= d.get(field) <= end]
        docs.sort(key=lambda d: d.get(field))
        return docs

    async def get_many(self, collection, keys):
        col = self._col(collection)
        return {k: self._out(k, col[k]) for k in keys if k in col}


def make_token(uid, name=None, email=None, secret=SECRET):
    payload = {"sub": uid}
    if name:
        payload["name"] = name
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def settings():
    return Settings(
        office_lat=OFFICE[0],
        office_lng=OFFICE[1],
        max_distance_meters=100,
        time_zone="Asia/Kolkata",
        jwt_secret=SECRET,
    )


@pytest.fixture
def store():
    store = InMemoryStore()
    users = store._col(USERS)
    users["emp1"] = {"name": "Asha Rao", "email": "asha@example.com", "role": "employee", "shift": "10:00"}
    users["emp2"] = {"name": "Vikram Das", "email": "vikram@example.com", "role": "employee", "shift": "13:00"}
    users["boss"] = {"name": "Admin", "email": "admin@example.com", "role": "admin", "shift": "10:00"}
    return store


@pytest.fixture
def clock():
    return FixedClock(ist(2024, 3, 4, 10, 0))


@pytest.fixture
def auth(store, settings):
    return AuthService(store, settings)


@pytest.fixture
def attendance(store, auth, settings, clock):
    return AttendanceService(store, auth, settings, clock)


@pytest.fixture
def holidays(store, auth):
    return HolidayService(store, auth)


@pytest.fixture
def employees(store, auth):
    return EmployeeService(store, auth)


@pytest.fixture
def reports(store, auth, settings, clock):
    return ReportService(store, auth, settings, clock)


@pytest.fixture
def emp_token():
    return make_token("emp1")


@pytest.fixture
def admin_token():
    return make_token("boss")
