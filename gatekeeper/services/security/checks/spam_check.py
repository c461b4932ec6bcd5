# gatekeeper/services/security/checks/spam_check.py
"""
Эвристики спама: капс и повторяющийся текст.
"""
import re
from typing import Optional

from gatekeeper.config.models import SecurityConfig
from gatekeeper.services.normalizer import NormalizedMessage
from gatekeeper.services.security.checks.base import BaseCheck
from gatekeeper.services.security.models import SecurityReason, SecurityVerdict

UPPERCASE_RE = re.compile(r"[A-Z]")


def uppercase_ratio(text: str) -> float:
    """Доля латинских заглавных букв от всей длины текста."""
    if not text:
        return 0.0
    return len(UPPERCASE_RE.findall(text)) / len(text)


def uniqueness_ratio(text: str) -> float:
    words = text.split()
    if not words:
        return 1.0
    return len(set(words)) / len(words)


class SpamCheck(BaseCheck):
    name = "spam"

    def __init__(self, config: SecurityConfig):
        self.config = config

    def is_excessive_caps(self, text: str) -> bool:
        return len(text) > self.config.caps_min_length and uppercase_ratio(text) > self.config.caps_ratio

    def is_repetitive(self, text: str) -> bool:
        if len(text) < self.config.repetitive_min_length:
            return False
        if len(text.split()) < self.config.repetitive_min_words:
            return False
        return uniqueness_ratio(text) < self.config.repetitive_unique_ratio

    async def check(self, message: NormalizedMessage) -> Optional[SecurityVerdict]:
        text = message.text
        if self.is_excessive_caps(text):
            return SecurityVerdict.warn(SecurityReason.EXCESSIVE_CAPS)
        if self.is_repetitive(text):
            return SecurityVerdict.warn(SecurityReason.REPETITIVE_TEXT)
        return None
