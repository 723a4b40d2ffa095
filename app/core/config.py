import logging
from functools import lru_cache
from typing import Tuple

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = (
    "Missing required environment variables. Check your .env file."
)


class Settings(BaseSettings):
    PROJECT_NAME: str = "Submission Relay"
    VERSION: str = "1.0.0"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 5001

    # --- Mail account (sender and recipient) ---
    EMAIL_USER: str
    EMAIL_PASS: SecretStr

    # --- Mail gateway ---
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_TIMEOUT: float = 30.0

    # --- CORS ---
    ALLOWED_ORIGINS: Tuple[str, ...] = Field(
        default=("https://www.modvisorconsultants.com",),
        description="Origins allowed to call the submission endpoint.",
    )

    # --- Uploads ---
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024  # 5MB

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore", frozen=True
    )

    @field_validator("EMAIL_USER", mode="after")
    @classmethod
    def require_email_user(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("EMAIL_USER must not be empty")
        return v

    @field_validator("EMAIL_PASS", mode="after")
    @classmethod
    def require_email_pass(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("EMAIL_PASS must not be empty")
        return v


def load_settings(**overrides) -> Settings:
    """Build settings or stop the process when mail credentials are missing."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        failed_fields = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        if failed_fields & {"EMAIL_USER", "EMAIL_PASS"}:
            logger.error(MISSING_CREDENTIALS_MESSAGE)
        else:
            logger.error("Invalid configuration: %s", ", ".join(sorted(failed_fields)))
        raise SystemExit(1) from exc


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings, built once."""
    return load_settings()
