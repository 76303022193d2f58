# main.py

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from config import get_settings
from routers import attendance_router, holiday_router, employee_router, report_router
from utils.exceptions import AttendanceError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Employee Attendance Tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AttendanceError)
async def attendance_error_handler(request: Request, exc: AttendanceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "code": exc.code}
    )

# Include your routers
app.include_router(attendance_router.router)
app.include_router(holiday_router.router)
app.include_router(employee_router.router)
app.include_router(report_router.router)


@app.get("/")
def read_root():
    return {"message": "Welcome to the Employee Attendance Tracker"}
