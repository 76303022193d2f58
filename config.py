# config.py
from pydantic import BaseModel, ConfigDict
from dotenv import load_dotenv
from functools import lru_cache
from typing import List
import os

load_dotenv()


class Settings(BaseModel):
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "attendance_db"
    office_lat: float = 0.0
    office_lng: float = 0.0
    max_distance_meters: float = 100.0
    time_zone: str = "Asia/Kolkata"
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = ConfigDict(frozen=True)


def load_settings() -> Settings:
    """Build settings from the environment (and a .env file if present)."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        mongo_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
        mongo_db=os.getenv("MONGODB_DB", "attendance_db"),
        office_lat=float(os.getenv("OFFICE_LAT", "0") or 0),
        office_lng=float(os.getenv("OFFICE_LNG", "0") or 0),
        max_distance_meters=float(os.getenv("MAX_DISTANCE_METERS", "100")),
        time_zone=os.getenv("TIME_ZONE", "Asia/Kolkata"),
        jwt_secret=os.getenv("JWT_SECRET", ""),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
