# routers/employee_router.py
from fastapi import APIRouter, Depends
from models.employee import EmployeeProfileUpdate
from routers.dependencies import bearer_token, get_employee_service
from services.employee_service import EmployeeService

router = APIRouter(tags=["employees"])


@router.get("/employees")
async def api_list_employees(token: str = Depends(bearer_token), service: EmployeeService = Depends(get_employee_service)):
    return await service.list_employees(token)


@router.get("/me")
async def api_my_profile(token: str = Depends(bearer_token), service: EmployeeService = Depends(get_employee_service)):
    return await service.get_my_profile(token)


@router.put("/employees/{uid}")
async def api_upsert_employee(
    uid: str,
    profile: EmployeeProfileUpdate,
    token: str = Depends(bearer_token),
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.upsert_profile(token, uid, profile)
