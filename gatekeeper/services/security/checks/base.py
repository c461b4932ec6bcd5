# gatekeeper/services/security/checks/base.py
"""
Базовый класс для стадий шлюза безопасности.
"""
from abc import ABC, abstractmethod
from typing import Optional

from gatekeeper.services.normalizer import NormalizedMessage
from gatekeeper.services.security.models import SecurityVerdict


class BaseCheck(ABC):
    """
    Одна стадия шлюза.

    Возвращает вердикт, если стадия сработала, иначе None -
    тогда шлюз переходит к следующей стадии.
    """

    name: str = "check"

    @abstractmethod
    async def check(self, message: NormalizedMessage) -> Optional[SecurityVerdict]:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
