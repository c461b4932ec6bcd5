# gatekeeper/services/commands/dispatcher.py
"""
Выполнение команды с изолированной границей отказа и аудитом.
"""
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Set

from loguru import logger

from gatekeeper.services.commands.models import Command, CommandContext

audit_logger = logger.bind(audit=True)


@dataclass(frozen=True)
class AuditRecord:
    command: str
    actor: str
    timestamp: float


class CommandDispatcher:
    """
    Вызывает обработчик команды.

    Любое исключение обработчика перехватывается здесь, логируется с
    трассировкой, а пользователь получает общее сообщение об ошибке.
    Обработка других событий от этого не зависит.
    """

    def __init__(self, audit_history: int = 500, clock: Callable[[], float] = time.time):
        self.clock = clock
        self.started_at = clock()
        self.audit_log: Deque[AuditRecord] = deque(maxlen=audit_history)
        self.commands_handled = 0
        self.commands_failed = 0
        self._users: Set[str] = set()

    async def execute(self, command: Command, ctx: CommandContext) -> bool:
        actor = ctx.actor
        try:
            await command.handler(ctx)
        except Exception as e:
            self.commands_failed += 1
            logger.opt(exception=True).error(
                f"❌ Ошибка выполнения команды '{command.name}' (actor={actor}): {e}"
            )
            await self._report_failure(ctx)
            return False

        record = AuditRecord(command=command.name, actor=actor, timestamp=self.clock())
        self.audit_log.append(record)
        self.commands_handled += 1
        self._users.add(actor)
        audit_logger.bind(
            command=record.command, actor=record.actor, timestamp=record.timestamp
        ).info("Команда выполнена: {} by {}", record.command, record.actor)
        return True

    async def _report_failure(self, ctx: CommandContext) -> None:
        try:
            await ctx.reply(ctx.t("ERRORS.COMMAND_FAILED"))
        except Exception as e:
            logger.error(f"Не удалось отправить сообщение об ошибке actor={ctx.actor}: {e}")

    def recent(self, limit: int = 20) -> List[AuditRecord]:
        return list(self.audit_log)[-limit:]

    @property
    def users_served(self) -> int:
        return len(self._users)

    @property
    def uptime(self) -> float:
        return self.clock() - self.started_at
