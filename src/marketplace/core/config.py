from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Service Marketplace"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True  # Set to False in production

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Identity (token verification only - tokens are issued elsewhere)
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Requests
    project_number_prefix: str = "REQ"

    # Notifications
    notification_body_max_length: int = 1000

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("project_number_prefix")
    @classmethod
    def validate_project_number_prefix(cls, v: str) -> str:
        v = v.strip().upper()
        if not v.isalnum():
            raise ValueError("PROJECT_NUMBER_PREFIX must be alphanumeric")
        return v

    @field_validator("notification_body_max_length")
    @classmethod
    def validate_notification_body_max_length(cls, v: int) -> int:
        # Room for the "..." suffix, and no longer than the body column
        if not 4 <= v <= 1000:
            raise ValueError("NOTIFICATION_BODY_MAX_LENGTH must be between 4 and 1000")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
