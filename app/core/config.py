from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR = Path(__file__).resolve().parent.parent

class Settings(BaseSettings):
    PROJECT_NAME: str = "Care.xyz API"

    # Server
    PORT: int = 8000
    ENVIRONMENT: str = "development"

    # Security (shared with the identity provider that issues the tokens)
    SECRET_KEY: str = "dev_secret_key"

    # Booking persistence
    STORAGE_ENABLED: bool = True
    STORAGE_DIR: str = "data/storage"
    BOOKINGS_KEY: str = "bookings"

    # Service catalog
    SERVICES_FILE: str = str(APP_DIR / "data" / "services.json")

    # Email
    EMAIL_USER: str = ""
    EMAIL_PASS: str = ""
    SMTP_SERVER: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SENDGRID_API_KEY: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/errors.log"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

settings = Settings()
