"""
Configuration settings for the KesselRun API
"""
import logging
import secrets
from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

WEAK_SECRET_KEYS = {
    "dev-secret-key-change-in-production",
    "your-secret-key-change-in-production",
    "change-me",
    "secret",
}


def _split_csv(value, default: List[str]) -> List[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, list):
        return value
    return default


class Settings(BaseSettings):
    """Application settings"""

    # Project Info
    PROJECT_NAME: str = "KesselRun API"
    VERSION: str = "1.0.0"
    APP_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # API Settings
    API_VERSIONS: Union[str, List[str]] = Field(default="v1")
    SECRET_KEY: str = Field(default="")

    @field_validator('API_VERSIONS', mode='before')
    @classmethod
    def parse_api_versions(cls, v):
        """Parse API versions from string or list"""
        return _split_csv(v, ["v1"])

    @field_validator('SECRET_KEY')
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate SECRET_KEY is strong enough"""
        data = info.data if info.data else {}
        is_dev = data.get('APP_ENV') in ('development', 'test') or data.get('DEBUG') is True

        if not v:
            if is_dev:
                logger.warning("No SECRET_KEY provided. Generating random key for development.")
                return secrets.token_urlsafe(32)
            raise ValueError(
                "SECRET_KEY must be set in production. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )

        if v.lower() in WEAK_SECRET_KEYS:
            if not is_dev:
                raise ValueError("Cannot use default/weak SECRET_KEY in production.")
            logger.warning("Using weak SECRET_KEY. Generating secure key for development.")
            return secrets.token_urlsafe(32)

        if len(v) < 32:
            if not is_dev:
                raise ValueError("SECRET_KEY must be at least 32 characters long in production")
            logger.warning("SECRET_KEY is too short (%d chars). Should be at least 32.", len(v))

        return v

    # CORS
    CORS_ORIGINS: Union[str, List[str]] = Field(
        default="http://localhost:3000,http://localhost"
    )

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list"""
        return _split_csv(v, ["http://localhost:3000", "http://localhost"])

    ALLOWED_HOSTS: Union[str, List[str]] = Field(
        default="localhost,127.0.0.1"
    )

    @field_validator('ALLOWED_HOSTS', mode='before')
    @classmethod
    def parse_allowed_hosts(cls, v):
        """Parse allowed hosts from string or list"""
        return _split_csv(v, ["localhost", "127.0.0.1"])

    # Transport
    HTTPS_REDIRECT_ENABLED: bool = Field(default=False)
    SESSION_ENABLED: bool = Field(default=True)
    SESSION_MAX_AGE: int = Field(default=60 * 20)  # 20 minutes

    # Rate Limiting
    RATE_LIMIT_PER_MINUTE: int = 60

    # Logging & observability
    LOG_LEVEL: str = Field(default="INFO")
    STRUCTURED_LOGGING_ENABLED: bool = Field(default=False)
    TRACING_ENABLED: bool = Field(default=False)
    OBSERVABILITY_ENABLED: bool = Field(default=True)
    METRICS_ENABLED: bool = Field(default=True)
    METRICS_PATH: str = Field(default="/metrics")

    # Widgets
    WIDGET_NAME_MAX_LENGTH: int = Field(default=100, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def docs_enabled(self) -> bool:
        return self.APP_ENV in ("development", "staging")


# Create settings instance
settings = Settings()
