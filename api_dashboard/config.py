from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_DASHBOARD_", case_sensitive=False, extra="ignore")

    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    database_url: str = Field(default="sqlite:///./api_dashboard.db")

    jwt_secret: str = Field(default="")
    jwt_ttl_seconds: int = Field(default=86400, ge=3600, le=604800)
    password_hash_rounds: int = Field(default=10, ge=10, le=16)

    request_timeout_sec: float = Field(default=15.0, ge=15.0, le=30.0)

    cors_allow_origins: str = Field(default="*")

    def parsed_cors_allow_origins(self) -> list[str]:
        return [value.strip() for value in self.cors_allow_origins.split(",") if value.strip()]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @staticmethod
    def _contains_placeholder(value: str) -> bool:
        return "replace-with" in value.strip().lower()

    def production_safety_errors(self) -> list[str]:
        if not self.is_production():
            return []

        errors: list[str] = []

        if len(self.jwt_secret.strip()) < 32:
            errors.append("API_DASHBOARD_JWT_SECRET must be at least 32 characters in production")

        if self._contains_placeholder(self.jwt_secret):
            errors.append("API_DASHBOARD_JWT_SECRET must not use placeholder values in production")

        if self.database_url.strip().lower().startswith("sqlite"):
            errors.append("API_DASHBOARD_DATABASE_URL must not use sqlite in production")

        if self._contains_placeholder(self.database_url):
            errors.append("API_DASHBOARD_DATABASE_URL must not use placeholder values in production")

        if "*" in self.parsed_cors_allow_origins():
            errors.append("API_DASHBOARD_CORS_ALLOW_ORIGINS must list explicit origins in production")

        return errors


def get_settings() -> Settings:
    return Settings()
