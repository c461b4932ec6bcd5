# gatekeeper/config/models/core.py
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class CommandsConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    default_cooldown_seconds: float = 3.0
    cooldown_ttl_seconds: int = 300
    audit_history: int = 500


class SweepConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    rate_window_seconds: int = 60
    cooldown_seconds: int = 60
    warning_seconds: int = 600


class StorageConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    backend: Literal["json", "redis"] = "json"
    data_dir: str = "data"
    key_prefix: str = "gatekeeper"
    # Пользовательские алиасы команд, относительно data_dir
    aliases_file: str = "aliases.json"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    json_enabled: bool = False
    service_name: str = "gatekeeper"
    debug_loggers: List[str] = []
    audit_path: Optional[str] = None
