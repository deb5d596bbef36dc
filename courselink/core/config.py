import os

from dotenv import load_dotenv

load_dotenv()


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["http://localhost:4200"])

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

# Booking slot durations are truncated down to a whole multiple of this.
SLOT_RESOLUTION_MICROSECONDS = int(os.getenv("SLOT_RESOLUTION_MICROSECONDS", "1000000"))
MAX_BOOKING_SLOTS_COUNT = int(os.getenv("MAX_BOOKING_SLOTS_COUNT", "1000"))


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if SLOT_RESOLUTION_MICROSECONDS <= 0:
        raise RuntimeError("SLOT_RESOLUTION_MICROSECONDS must be a positive integer.")
    if MAX_BOOKING_SLOTS_COUNT <= 0:
        raise RuntimeError("MAX_BOOKING_SLOTS_COUNT must be a positive integer.")
