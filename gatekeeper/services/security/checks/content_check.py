# gatekeeper/services/security/checks/content_check.py
import re
from typing import List, Optional, Pattern

from loguru import logger

from gatekeeper.config.models import SecurityConfig
from gatekeeper.services.normalizer import NormalizedMessage
from gatekeeper.services.security.checks.base import BaseCheck
from gatekeeper.services.security.models import SecurityReason, SecurityVerdict


class ContentSafetyCheck(BaseCheck):
    """Сторонние инвайт-ссылки и голые URL."""

    name = "content"

    def __init__(self, config: SecurityConfig):
        self.patterns: List[Pattern[str]] = [
            re.compile(p, re.IGNORECASE) for p in config.forbidden_patterns
        ]

    async def check(self, message: NormalizedMessage) -> Optional[SecurityVerdict]:
        for pattern in self.patterns:
            if pattern.search(message.text):
                logger.debug(f"ContentSafetyCheck: совпадение с {pattern.pattern!r}")
                return SecurityVerdict.delete(SecurityReason.FORBIDDEN_CONTENT)
        return None
