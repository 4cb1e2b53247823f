# tagshelf/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class DBConfig(BaseModel):
    driver: str = "sqlite"
    path: Path = Path("tagshelf.db")
    echo: bool = False
    foreign_keys: bool = True

    # Optional single URL (if set, it takes precedence over driver/path)
    url: Optional[str] = None

    @field_validator("echo", "foreign_keys", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}:///{self.path}"


class StoreConfig(BaseModel):
    # rows per multi-row INSERT; keeps bound parameters under SQLite's limit
    insert_batch_size: int = Field(400, ge=1, le=10_000)
    # upper bound on criteria per intersection query; they bind as one IN list
    max_criteria: int = Field(500, ge=1, le=10_000)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "tagshelf"
    app_env: str = "development"  # development|test|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    db: DBConfig = DBConfig()
    store: StoreConfig = StoreConfig()

    # top-level DATABASE_URL; fills db.url when DB__URL is not set
    database_url_env: Optional[str] = Field(default=None, validation_alias="DATABASE_URL", exclude=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _apply_database_url(self) -> "Settings":
        if self.database_url_env and not self.db.url:
            self.db = self.db.model_copy(update={"url": self.database_url_env})
        return self

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this where no explicit Settings
    object was handed in:
        from tagshelf.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
