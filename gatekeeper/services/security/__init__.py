# gatekeeper/services/security/__init__.py
"""
Шлюз безопасности входящих событий.

Компоненты:
- SecurityGate - фасад, прогоняющий стадии по порядку
- BlockLists - черный и белый списки с сохранением
- SecurityVerdict - результат проверки
"""

from gatekeeper.services.security.lists import BlockLists
from gatekeeper.services.security.models import (
    SecurityAction,
    SecurityReason,
    SecurityRecord,
    SecurityVerdict,
)
from gatekeeper.services.security.service import SecurityGate

__all__ = [
    "BlockLists",
    "SecurityAction",
    "SecurityGate",
    "SecurityReason",
    "SecurityRecord",
    "SecurityVerdict",
]
