# gatekeeper/services/security/checks/__init__.py
"""
Стадии шлюза безопасности в порядке выполнения.
"""

from gatekeeper.services.security.checks.access_check import BlacklistCheck, WhitelistCheck
from gatekeeper.services.security.checks.base import BaseCheck
from gatekeeper.services.security.checks.content_check import ContentSafetyCheck
from gatekeeper.services.security.checks.rate_limit_check import RateLimitCheck
from gatekeeper.services.security.checks.spam_check import SpamCheck

__all__ = [
    "BaseCheck",
    "BlacklistCheck",
    "WhitelistCheck",
    "RateLimitCheck",
    "SpamCheck",
    "ContentSafetyCheck",
]
