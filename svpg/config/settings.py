"""
Application settings and configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str):
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings:
    # Application
    APP_NAME = "SV PG Backend"
    VERSION = "1.0.0"
    DEBUG = os.getenv("DEBUG", "False") == "True"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5000"))

    # Database
    MONGO_URL = os.getenv("MONGO_URL", "")
    DATABASE_NAME = os.getenv("DATABASE_NAME", "svpg")
    DB_RETRY_DELAY_SECONDS = float(os.getenv("DB_RETRY_DELAY_SECONDS", "3"))
    DB_SERVER_SELECTION_TIMEOUT_MS = int(os.getenv("DB_SERVER_SELECTION_TIMEOUT_MS", "5000"))

    # CORS
    ALLOWED_ORIGINS = _split_origins(os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:3001,https://mohansvpg-frontend.onrender.com",
    ))

    # File Uploads
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(os.getcwd(), "uploads"))
    UPLOAD_URL_PREFIX = "/uploads"

    # Manual payments are gated by a single shared code. This is not real
    # authentication and should be replaced before exposing the API publicly.
    PAYMENT_ADMIN_CODE = os.getenv("PAYMENT_ADMIN_CODE", "CQNPV5241F0004")

    # JSON object {"<floor>": [bed capacity per room, ...]}; empty means default layout
    ROOM_LAYOUT = os.getenv("ROOM_LAYOUT", "")

settings = Settings()
