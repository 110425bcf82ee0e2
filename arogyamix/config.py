import os
from pathlib import Path
from dotenv import load_dotenv
from fastapi.security import HTTPBearer

BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")


class Settings:
    PROJECT_NAME = "ArogyaMix Backend"
    VERSION = "0.1.0"

    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'arogyamix.db'}")

    JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    SESSION_SECRET = os.getenv("SESSION_SECRET") or JWT_SECRET

    DELIVERY_FEE = int(os.getenv("DELIVERY_FEE", 50))
    CART_IDLE_MINUTES = int(os.getenv("CART_IDLE_MINUTES", 120))
    CART_STORE_MAX = int(os.getenv("CART_STORE_MAX", 10000))
    MEETING_LINK = os.getenv("MEETING_LINK", "https://meet.google.com/new")
    MEETING_HOST = os.getenv("MEETING_HOST", "meet.google.com")
    DEFAULT_APPOINTMENT_DURATION_MINUTES = int(os.getenv("DEFAULT_APPOINTMENT_DURATION_MINUTES", 30))
    APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    bearer_scheme = HTTPBearer()
    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]


settings = Settings()
