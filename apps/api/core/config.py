import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal, cast

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_ENV_FILE = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_ENV_FILE, extra="ignore")

    DATABASE_URL: str = "sqlite:///./bookflix.db"
    JWT_SECRET: str
    JWT_EXPIRE_MINUTES: int = 60 * 24
    # Raw env strings reach parse_cors_origins undecoded.
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000"]
    STORAGE_MODE: Literal["memory", "local", "database"] = "database"
    STORAGE_PATH: str = "./bookflix_data"
    GOOGLE_BOOKS_API_KEY: str | None = None
    CATALOG_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    CATALOG_MAX_CONCURRENCY: int = Field(default=4, ge=1, le=16)
    SHELF_CACHE_TTL_SECONDS: int = Field(default=600, ge=0)

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                raise ValueError("CORS_ORIGINS cannot be empty.")
            try:
                parsed = json.loads(raw) if raw.startswith("[") else raw.split(",")
            except json.JSONDecodeError:
                parsed = raw.split(",")
            value = parsed

        if not isinstance(value, list):
            raise ValueError("CORS_ORIGINS must be a list or comma-separated string.")

        normalized: list[str] = []
        for origin in value:
            if not isinstance(origin, str):
                raise ValueError("CORS_ORIGINS entries must be strings.")
            cleaned = origin.strip().strip('[]"\'').rstrip("/")
            if cleaned:
                normalized.append(cleaned)

        if not normalized:
            raise ValueError("CORS_ORIGINS must include at least one origin.")

        # Keep order while removing duplicates.
        return list(dict.fromkeys(normalized))

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, value: str) -> str:
        if len(value.encode("utf-8")) < 32:
            raise ValueError("JWT_SECRET must be at least 32 bytes for HS256.")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


class _LazySettings:
    def __getattr__(self, item: str) -> Any:
        return getattr(get_settings(), item)


settings = cast(Settings, _LazySettings())
