# models/employee.py
from pydantic import BaseModel
from typing import Optional
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class Identity(BaseModel):
    uid: str
    name: Optional[str] = None
    email: Optional[str] = None


class EmployeeProfileUpdate(BaseModel):
    name: str
    email: Optional[str] = None
    role: Role = Role.EMPLOYEE
    shift: str = "10:00"
