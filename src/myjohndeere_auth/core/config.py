from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="", case_sensitive=True, extra="ignore"
    )

    # Application
    APP_NAME: str = "MyJohnDeere Auth"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Sign in with MyJohnDeere over OAuth 1.0a"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # Signs the session cookie that carries in-flight handshake state
    SESSION_SECRET_KEY: str = Field(default="change-me-in-production-please-32ch", min_length=32)

    # MyJohnDeere OAuth 1.0a client
    MYJOHNDEERE_CONSUMER_KEY: str | None = None
    MYJOHNDEERE_CONSUMER_SECRET: str | None = None
    MYJOHNDEERE_CALLBACK_URL: str | None = None
    MYJOHNDEERE_PLATFORM_URL: str | None = Field(
        default=None, description="Overrides the sandbox platform, e.g. https://api.deere.com/platform"
    )

    # CORS
    CORS_ORIGINS: str | list[str] = ["http://localhost:3000", "http://localhost:8000"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: str | list[str] = ["*"]
    CORS_ALLOW_HEADERS: str | list[str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> Any:
        if isinstance(v, str):
            if v.startswith("[") and v.endswith("]"):
                import json

                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("CORS_ALLOW_METHODS", "CORS_ALLOW_HEADERS", mode="before")
    @classmethod
    def parse_lists(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


# Global settings instance
settings = Settings()
