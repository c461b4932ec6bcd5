# gatekeeper/config/settings.py
import logging
from typing import Any, List, Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gatekeeper.config.models import (
    CommandsConfig,
    LoggingConfig,
    SecurityConfig,
    StorageConfig,
    SweepConfig,
)


def _parse_id_list(v: Any, field_name: str) -> List[str]:
    if v is None:
        return []
    if isinstance(v, (list, tuple, set)):
        return [str(x).strip() for x in v if str(x).strip()]
    if isinstance(v, (int, str)):
        s = str(v).strip()
        if not s:
            return []
        return [item.strip() for item in s.split(",") if item.strip()]
    raise TypeError(f"{field_name} должен быть строкой с ID через запятую или списком.")


class Settings(BaseSettings):
    BOT_TOKEN: Optional[SecretStr] = None
    REDIS_URL: str = "redis://localhost:6379/0"

    PREFIX: str = "/"
    LANGUAGE: str = "EN"
    LANGUAGES_DIR: Optional[str] = None

    owner_ids: Any = Field(default_factory=list, alias="OWNER_IDS")
    admin_ids: Any = Field(default_factory=list, alias="ADMIN_IDS")
    allowed_ids: Any = Field(default_factory=list, alias="ALLOWED_IDS")
    blocked_ids: Any = Field(default_factory=list, alias="BLOCKED_IDS")

    IS_WEB_PROCESS: bool = False
    PORT: int = 10000

    log_level: str = "INFO"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    security: SecurityConfig = Field(default_factory=SecurityConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    sweeps: SweepConfig = Field(default_factory=SweepConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @field_validator("REDIS_URL", mode="before")
    @classmethod
    def assemble_redis_dsn(cls, v: Any) -> str:
        if isinstance(v, str) and not v.startswith(("redis://", "rediss://", "unix://")):
            return f"redis://{v}"
        return v

    @field_validator("PREFIX", mode="before")
    @classmethod
    def validate_prefix(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("PREFIX не может быть пустым.")
        return v.strip()

    @field_validator("owner_ids", "admin_ids", "allowed_ids", "blocked_ids", mode="before")
    @classmethod
    def parse_ids(cls, v: Any, info) -> List[str]:
        return _parse_id_list(v, info.field_name.upper())

    @property
    def bot_token(self) -> Optional[str]:
        return self.BOT_TOKEN.get_secret_value() if self.BOT_TOKEN else None

    @property
    def redis_url(self) -> str:
        return self.REDIS_URL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )


try:
    settings = Settings()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    logging.info("✅ Конфигурация успешно загружена и валидирована.")
except ValidationError as e:
    logging.critical(
        "❌ КРИТИЧЕСКАЯ ОШИБКА ВАЛИДАЦИИ НАСТРОЕК. Проверьте .env и переменные окружения.\n%s",
        e,
    )
    raise SystemExit("Ошибки валидации конфигурации.")
