# gatekeeper/services/security/checks/rate_limit_check.py
from typing import Optional

from gatekeeper.services.normalizer import NormalizedMessage
from gatekeeper.services.security.checks.base import BaseCheck
from gatekeeper.services.security.models import SecurityReason, SecurityVerdict
from gatekeeper.services.security.rate_limiter import SlidingWindowRateLimiter


class RateLimitCheck(BaseCheck):
    name = "rate_limit"

    def __init__(self, limiter: SlidingWindowRateLimiter):
        self.limiter = limiter

    async def check(self, message: NormalizedMessage) -> Optional[SecurityVerdict]:
        result = self.limiter.hit(message.sender_id)
        if not result.allowed:
            return SecurityVerdict.block(SecurityReason.RATE_LIMITED, retry_after=result.retry_after)
        return None
