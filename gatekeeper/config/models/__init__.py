# gatekeeper/config/models/__init__.py
from gatekeeper.config.models.core import (
    CommandsConfig,
    LoggingConfig,
    StorageConfig,
    SweepConfig,
)
from gatekeeper.config.models.security import SecurityConfig

__all__ = [
    "CommandsConfig",
    "LoggingConfig",
    "StorageConfig",
    "SweepConfig",
    "SecurityConfig",
]
