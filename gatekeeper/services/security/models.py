# gatekeeper/services/security/models.py
"""
Модели данных шлюза безопасности.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SecurityAction(str, Enum):
    NONE = "NONE"
    BLOCK = "BLOCK"
    WARN = "WARN"
    DELETE = "DELETE"


class SecurityReason(str, Enum):
    CLEAN = "CLEAN"
    BLACKLISTED = "BLACKLISTED"
    NOT_WHITELISTED = "NOT_WHITELISTED"
    RATE_LIMITED = "RATE_LIMITED"
    EXCESSIVE_CAPS = "EXCESSIVE_CAPS"
    REPETITIVE_TEXT = "REPETITIVE_TEXT"
    FORBIDDEN_CONTENT = "FORBIDDEN_CONTENT"


@dataclass(frozen=True)
class SecurityVerdict:
    """
    Результат проверки события шлюзом.

    Attributes:
        safe: Событие допущено дальше по конвейеру
        reason: Причина решения
        action: Что сделать с событием
        retry_after: Через сколько секунд можно повторить (только RATE_LIMITED)
        warning_count: Число предупреждений после WARN/DELETE
    """
    safe: bool
    reason: SecurityReason
    action: SecurityAction = SecurityAction.NONE
    retry_after: Optional[int] = None
    warning_count: Optional[int] = None

    @classmethod
    def clean(cls) -> "SecurityVerdict":
        return cls(safe=True, reason=SecurityReason.CLEAN)

    @classmethod
    def block(cls, reason: SecurityReason, retry_after: Optional[int] = None) -> "SecurityVerdict":
        return cls(safe=False, reason=reason, action=SecurityAction.BLOCK, retry_after=retry_after)

    @classmethod
    def warn(cls, reason: SecurityReason) -> "SecurityVerdict":
        return cls(safe=False, reason=reason, action=SecurityAction.WARN)

    @classmethod
    def delete(cls, reason: SecurityReason) -> "SecurityVerdict":
        return cls(safe=False, reason=reason, action=SecurityAction.DELETE)

    @property
    def counts_as_warning(self) -> bool:
        return self.action in (SecurityAction.WARN, SecurityAction.DELETE)


@dataclass(frozen=True)
class WarningEntry:
    timestamp: float
    reason: SecurityReason


@dataclass
class SecurityRecord:
    """
    История нарушений отправителя. Создается при первом нарушении.
    """
    sender_id: str
    warning_count: int = 0
    warning_history: List[WarningEntry] = field(default_factory=list)
    blacklisted: bool = False
