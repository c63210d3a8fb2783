import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


def _get_list(value: str | None, default: str) -> list[str]:
    raw = default if value is None else value
    return [item.strip() for item in raw.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

AUTH_API_BASE_URL = os.getenv("AUTH_API_BASE_URL", "http://localhost:5000/api")
AUTH_API_TIMEOUT_SECONDS = _get_float(os.getenv("AUTH_API_TIMEOUT_SECONDS"))

SESSION_COOKIE_SECURE = _get_bool(os.getenv("SESSION_COOKIE_SECURE"), default=False)
SESSION_COOKIE_MAX_AGE = int(os.getenv("SESSION_COOKIE_MAX_AGE", str(60 * 60 * 24)))

CORS_ALLOWED_ORIGINS = _get_list(os.getenv("CORS_ALLOWED_ORIGINS"), "http://localhost:5173")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and not SESSION_COOKIE_SECURE:
        raise RuntimeError("SESSION_COOKIE_SECURE must be enabled in production.")
    if APP_ENV.lower() == "production" and not AUTH_API_BASE_URL.startswith("https://"):
        raise RuntimeError("AUTH_API_BASE_URL must use https in production.")
