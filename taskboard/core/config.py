# taskboard/core/config.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ALLOWED_ENVS = {"dev", "prod", "test"}
_ALLOWED_DRIVERS = {"psycopg2", "psycopg"}
_ALLOWED_SSLMODES = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    env: str = Field("dev", alias="ENV")
    app_version: str = Field("0.1.0", alias="APP_VERSION")

    # DB
    database_url: str = Field("", alias="DATABASE_URL")
    database_driver: str = Field("psycopg2", alias="DATABASE_DRIVER")
    db_sslmode: Optional[str] = Field(None, alias="DB_SSLMODE")

    # Auth
    jwt_secret_key: str = Field("taskboard-secret-key", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    session_cookie_name: str = Field("taskboard_session", alias="SESSION_COOKIE_NAME")

    cors_allow_origins: str = Field(
        "http://localhost:3000,http://localhost:5173",
        alias="CORS_ALLOW_ORIGINS",
    )
    share_token_bytes: int = Field(16, alias="SHARE_TOKEN_BYTES", ge=8)

    @field_validator("env")
    @classmethod
    def _check_env(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _ALLOWED_ENVS:
            raise ValueError(f"ENV must be one of {'|'.join(sorted(_ALLOWED_ENVS))}")
        return v

    @field_validator("database_driver")
    @classmethod
    def _check_driver(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _ALLOWED_DRIVERS:
            raise ValueError(f"DATABASE_DRIVER must be one of {'|'.join(sorted(_ALLOWED_DRIVERS))}")
        return v

    @field_validator("db_sslmode")
    @classmethod
    def _check_sslmode(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip().lower()
        if v not in _ALLOWED_SSLMODES:
            raise ValueError(f"DB_SSLMODE must be one of {'|'.join(sorted(_ALLOWED_SSLMODES))}")
        return v

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
