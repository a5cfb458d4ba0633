from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_HOUR_CATALOGUE = [
    "2 Hours/$70",
    "4 Hours/$130",
    "8 Hours/$270",
    "10 Hours/$340",
    "Full Day 14+ Hours/$550",
]

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "Studio Bookings")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    API_PREFIX: str = os.getenv("API_PREFIX", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    
    # MongoDB Settings
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "studio_bookings_db")
    
    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    
    # Booking rules
    HOUR_CATALOGUE: List[str] = DEFAULT_HOUR_CATALOGUE
    LEGACY_HOUR_MATCHING: bool = True
    DAY_UPDATE_MAX_RETRIES: int = int(os.getenv("DAY_UPDATE_MAX_RETRIES", "5"))
    ENFORCE_BOOKING_WINDOW: bool = True
    
    # Email settings
    EMAIL_HOST: str = os.getenv("EMAIL_HOST", "smtp.gmail.com")
    EMAIL_PORT: int = int(os.getenv("EMAIL_PORT", "587"))
    EMAIL_USERNAME: str = os.getenv("EMAIL_USERNAME", "")
    EMAIL_PASSWORD: str = os.getenv("EMAIL_PASSWORD", "")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "")
    EMAIL_USE_TLS: bool = True
    EMAIL_TIMEOUT: int = int(os.getenv("EMAIL_TIMEOUT", "30"))
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "")
    DEPOSIT_LINK: str = os.getenv("DEPOSIT_LINK", "")
    NOTIFY_ON_STATUS_CHANGE: bool = True
    
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    @field_validator("HOUR_CATALOGUE")
    @classmethod
    def check_catalogue(cls, labels: List[str]) -> List[str]:
        if not labels:
            raise ValueError("HOUR_CATALOGUE must contain at least one label")
        if len(set(labels)) != len(labels):
            raise ValueError("HOUR_CATALOGUE labels must be unique")
        return labels

settings = Settings()
