import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoices.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:5173"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Authentication
    JWT_SECRET = data.get("JWT_SECRET", "change-me-in-env-yaml-with-a-long-random-value")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_MINUTES = data.get("JWT_EXPIRES_MINUTES", 60 * 24 * 7)  # 7 days
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 10)

    # Invoicing
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "USD")
    INVOICE_NUMBER_MAX_ATTEMPTS = data.get("INVOICE_NUMBER_MAX_ATTEMPTS", 5)
    PDF_DEFAULT_COMPANY_NAME = data.get("PDF_DEFAULT_COMPANY_NAME", "Your Company")

    # Free-text extraction (any OpenAI-compatible endpoint)
    LLM_BASE_URL = data.get("LLM_BASE_URL", None)
    LLM_API_KEY = data.get("LLM_API_KEY", "")
    LLM_MODEL = data.get("LLM_MODEL", "gpt-4o-mini")
    LLM_TIMEOUT_SECONDS = data.get("LLM_TIMEOUT_SECONDS", 30.0)

    # Image extraction
    OCR_LANGUAGE = data.get("OCR_LANGUAGE", "eng")
    OCR_MAX_UPLOAD_BYTES = data.get("OCR_MAX_UPLOAD_BYTES", 10 * 1024 * 1024)  # 10 MB

    # Overdue invoice scan
    OVERDUE_CHECK_ENABLED = bool(data.get("OVERDUE_CHECK_ENABLED", True))
    OVERDUE_CHECK_INTERVAL_SECONDS = data.get("OVERDUE_CHECK_INTERVAL_SECONDS", 3600)  # Hourly
