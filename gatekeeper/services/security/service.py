# gatekeeper/services/security/service.py
"""
Шлюз безопасности: последовательные стадии с коротким замыканием.
"""
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from gatekeeper.config.models import SecurityConfig
from gatekeeper.services.normalizer import NormalizedMessage
from gatekeeper.services.security.checks import (
    BaseCheck,
    BlacklistCheck,
    ContentSafetyCheck,
    RateLimitCheck,
    SpamCheck,
    WhitelistCheck,
)
from gatekeeper.services.security.lists import BlockLists
from gatekeeper.services.security.models import SecurityReason, SecurityRecord, SecurityVerdict
from gatekeeper.services.security.rate_limiter import SlidingWindowRateLimiter
from gatekeeper.services.security.warnings import WarningTracker


class SecurityGate:
    """
    Допуск входящих событий.

    Порядок стадий:
    ┌───────────────┐   ┌───────────────┐   ┌────────────┐   ┌──────┐   ┌─────────┐
    │  Blacklist    │ → │  Whitelist    │ → │ Rate limit │ → │ Spam │ → │ Content │
    └───────────────┘   └───────────────┘   └────────────┘   └──────┘   └─────────┘

    Проверка останавливается на первой сработавшей стадии. WARN и DELETE
    добавляют предупреждение отправителю; при достижении порога
    warn_threshold отправитель попадает в черный список навсегда
    (до явного снятия блокировки).

    Шлюз не сериализует события сам: вызывающий код держит блокировку
    по отправителю (см. GatekeeperService).
    """

    def __init__(
        self,
        config: SecurityConfig,
        lists: BlockLists,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.lists = lists
        self.clock = clock
        self.limiter = SlidingWindowRateLimiter(
            max_requests=config.max_requests_per_minute,
            window_seconds=config.rate_window_seconds,
            clock=clock,
        )
        self.warnings = WarningTracker(
            ttl_seconds=config.warning_ttl_hours * 3600,
            clock=clock,
        )
        self.access_checks: List[BaseCheck] = [
            BlacklistCheck(lists),
            WhitelistCheck(lists),
        ]
        self.policy_checks: List[BaseCheck] = [
            RateLimitCheck(self.limiter),
            SpamCheck(config),
            ContentSafetyCheck(config),
        ]
        self.blocked_total = 0
        logger.info("Сервис SecurityGate инициализирован.")

    @property
    def checks(self) -> List[BaseCheck]:
        if not self.config.enabled:
            return list(self.access_checks)
        return self.access_checks + self.policy_checks

    async def scan(self, message: NormalizedMessage) -> SecurityVerdict:
        for stage in self.checks:
            verdict = await stage.check(message)
            if verdict is None:
                continue

            if verdict.counts_as_warning:
                count = await self.add_warning(message.sender_id, verdict.reason)
                verdict = replace(verdict, warning_count=count)

            self.blocked_total += 1
            logger.warning(
                f"🚨 Событие отклонено: sender={message.sender_id} chat={message.conversation_id} "
                f"stage={stage.name} reason={verdict.reason.value} action={verdict.action.value}"
            )
            return verdict

        return SecurityVerdict.clean()

    async def add_warning(self, sender_id: str, reason: SecurityReason) -> int:
        """
        Регистрирует предупреждение и при достижении порога блокирует отправителя.

        Returns:
            Новое число предупреждений
        """
        record = self.warnings.add(sender_id, reason)
        if record.warning_count >= self.config.warn_threshold:
            record.blacklisted = True
            if await self.lists.add_to_blacklist(sender_id):
                logger.warning(
                    f"⛔ {sender_id} добавлен в черный список: "
                    f"{record.warning_count} предупреждений"
                )
        return record.warning_count

    async def block(self, identifier: str) -> bool:
        added = await self.lists.add_to_blacklist(identifier)
        record = self.warnings.get(identifier)
        if record:
            record.blacklisted = True
        if added:
            logger.info(f"{identifier} заблокирован вручную")
        return added

    async def unblock(self, identifier: str) -> bool:
        removed = await self.lists.remove_from_blacklist(identifier)
        record = self.warnings.get(identifier)
        if record:
            record.blacklisted = False
        if removed:
            logger.info(f"{identifier} разблокирован")
        return removed

    def get_record(self, sender_id: str) -> Optional[SecurityRecord]:
        return self.warnings.get(sender_id)

    def reset_warnings(self, sender_id: str) -> bool:
        return self.warnings.reset(sender_id)

    def sweep_rate_windows(self) -> int:
        return self.limiter.sweep()

    def sweep_warnings(self) -> int:
        return self.warnings.sweep()

    def report(self) -> Dict[str, Any]:
        return {
            "blacklisted": len(self.lists.blacklist),
            "whitelisted": len(self.lists.whitelist),
            "warned": len(self.warnings),
            "windows": len(self.limiter),
            "blocked_total": self.blocked_total,
        }
