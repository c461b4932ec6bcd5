# gatekeeper/config/models/security.py
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

# Значения SecurityReason, по которым возможен отказ
RejectionReason = Literal[
    "BLACKLISTED",
    "NOT_WHITELISTED",
    "RATE_LIMITED",
    "EXCESSIVE_CAPS",
    "REPETITIVE_TEXT",
    "FORBIDDEN_CONTENT",
]

DEFAULT_FORBIDDEN_PATTERNS = [
    r"discord\.gg/\w+",
    r"t\.me/\w+",
    r"https?://[^\s]+",
]


class SecurityConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    enabled: bool = True

    warn_threshold: int = Field(default=3, ge=1)
    warning_ttl_hours: int = 24

    max_requests_per_minute: int = Field(default=30, ge=1)
    rate_window_seconds: int = 60

    caps_ratio: float = 0.7
    caps_min_length: int = 10
    repetitive_min_length: int = 20
    repetitive_min_words: int = 5
    repetitive_unique_ratio: float = 0.3

    forbidden_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_FORBIDDEN_PATTERNS))

    # Причины отказа, о которых пользователю не сообщаем
    silent_reasons: List[RejectionReason] = Field(default_factory=list)
