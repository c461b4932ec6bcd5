# gatekeeper/services/gatekeeper_service.py
"""
Конвейер обработки входящего события.

    событие → Normalizer → SecurityGate → префикс → Resolver
            → PermissionChecker → CooldownManager → Dispatcher

Каждая стадия может прервать конвейер; итог возвращается как
PipelineOutcome, а ответ пользователю отправляется через reply().
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from gatekeeper.config.models import SweepConfig
from gatekeeper.services.commands import (
    Command,
    CommandContext,
    CommandDispatcher,
    CommandRegistry,
    CooldownManager,
    CooldownScope,
    PermissionChecker,
    PermissionDenial,
    ReplyFunc,
)
from gatekeeper.services.localization import Localizer
from gatekeeper.services.normalizer import NormalizedMessage, normalize_event
from gatekeeper.services.scheduler import setup_scheduler
from gatekeeper.services.security import SecurityAction, SecurityGate, SecurityReason, SecurityVerdict
from gatekeeper.services.storage import JsonAliasFile
from gatekeeper.utils.exceptions import StorageError
from gatekeeper.utils.keyed_lock import KeyedLock


class PipelineStatus(str, Enum):
    ABORTED = "aborted"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    DENIED = "denied"
    COOLDOWN = "cooldown"
    EXECUTED = "executed"
    FAILED = "failed"


@dataclass
class PipelineOutcome:
    status: PipelineStatus
    message: Optional[NormalizedMessage] = None
    verdict: Optional[SecurityVerdict] = None
    command: Optional[Command] = None
    denial: Optional[PermissionDenial] = None
    remaining_ms: Optional[int] = None
    reply_text: Optional[str] = None

    @property
    def delete_message(self) -> bool:
        return self.verdict is not None and self.verdict.action == SecurityAction.DELETE


class GatekeeperService:
    """
    Единственный владелец изменяемого состояния допуска и диспетчеризации.

    События одного отправителя сериализуются по sender_id на стадиях
    шлюза, разрешения команды и кулдауна. Обработчик команды выполняется
    уже вне блокировки.
    """

    def __init__(
        self,
        gate: SecurityGate,
        registry: CommandRegistry,
        permissions: PermissionChecker,
        cooldowns: CooldownManager,
        dispatcher: CommandDispatcher,
        localizer: Localizer,
        prefix: str = "/",
        default_cooldown_seconds: float = 3.0,
        silent_reasons: Iterable[Union[str, SecurityReason]] = (),
        sweeps: Optional[SweepConfig] = None,
        alias_file: Optional[JsonAliasFile] = None,
        bot_username: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.gate = gate
        self.registry = registry
        self.permissions = permissions
        self.cooldowns = cooldowns
        self.dispatcher = dispatcher
        self.localizer = localizer
        self.prefix = prefix
        self.default_cooldown_seconds = default_cooldown_seconds
        self.silent_reasons = frozenset(SecurityReason(r) for r in silent_reasons)
        self.sweeps = sweeps or SweepConfig()
        self.alias_file = alias_file
        self.bot_username = bot_username
        self.clock = clock
        self._locks = KeyedLock()
        self.scheduler: Optional[AsyncIOScheduler] = None

    # ------------------------------------------------------------------
    # Жизненный цикл
    # ------------------------------------------------------------------

    async def start(self) -> None:
        await self.gate.lists.load()
        await self.load_custom_aliases()
        if self.scheduler is None:
            self.scheduler = setup_scheduler(self, self.sweeps)
            self.scheduler.start()
        logger.success(f"✅ GatekeeperService запущен: {len(self.registry)} команд, префикс '{self.prefix}'")

    async def load_custom_aliases(self) -> int:
        """Ошибка чтения файла не фатальна, конфликт алиасов - фатален."""
        if self.alias_file is None:
            return 0
        try:
            pairs = await self.alias_file.load()
        except StorageError as e:
            logger.warning(f"Пользовательские алиасы не загружены: {e}")
            return 0
        return self.registry.register_aliases(pairs)

    async def shutdown(self) -> None:
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=False)
            self.scheduler = None
        logger.info("GatekeeperService остановлен")

    def sweep_rate_windows(self) -> int:
        return self.gate.sweep_rate_windows()

    def sweep_cooldowns(self) -> int:
        return self.cooldowns.sweep()

    def sweep_warnings(self) -> int:
        return self.gate.sweep_warnings()

    # ------------------------------------------------------------------
    # Конвейер
    # ------------------------------------------------------------------

    def parse(self, text: str) -> Optional[Tuple[str, List[str]]]:
        """Возвращает (токен команды в нижнем регистре, аргументы) или None."""
        if not text.startswith(self.prefix):
            return None
        parts = text[len(self.prefix):].split()
        if not parts:
            return None
        token, _, mention = parts[0].lower().partition("@")
        if mention and self.bot_username and mention != self.bot_username.lower().lstrip("@"):
            # Команда адресована другому боту в группе
            return None
        if not token:
            return None
        return token, parts[1:]

    def _t(self, key: str, **variables: Any) -> str:
        variables.setdefault("prefix", self.prefix)
        return self.localizer.lookup(key, variables)

    def _rejection_text(self, verdict: SecurityVerdict) -> Optional[str]:
        if verdict.reason in self.silent_reasons:
            return None
        return self._t(
            f"SECURITY.{verdict.reason.value}",
            seconds=verdict.retry_after or 0,
            count=verdict.warning_count or 0,
            limit=self.gate.config.warn_threshold,
        )

    def cooldown_for(self, command: Command) -> float:
        if command.cooldown_seconds is None:
            return self.default_cooldown_seconds
        return command.cooldown_seconds

    def actor_key(self, command: Command, message: NormalizedMessage) -> str:
        if command.cooldown_scope == CooldownScope.CONVERSATION:
            return message.conversation_id
        return message.sender_id

    async def _admit(self, message: NormalizedMessage) -> PipelineOutcome:
        verdict = await self.gate.scan(message)
        if not verdict.safe:
            return PipelineOutcome(
                PipelineStatus.REJECTED,
                message=message,
                verdict=verdict,
                reply_text=self._rejection_text(verdict),
            )

        parsed = self.parse(message.text)
        if parsed is None:
            return PipelineOutcome(PipelineStatus.ABORTED, message=message, verdict=verdict)
        token, _ = parsed

        command = self.registry.resolve(token)
        if command is None:
            logger.debug(f"Команда не найдена: {token!r} от {message.sender_id}")
            return PipelineOutcome(
                PipelineStatus.NOT_FOUND,
                message=message,
                verdict=verdict,
                reply_text=self._t("ERRORS.COMMAND_NOT_FOUND", command=token),
            )

        denial = self.permissions.check(command, message)
        if denial is not None:
            logger.info(f"Доступ к '{command.name}' запрещен для {message.sender_id}: {denial.value}")
            return PipelineOutcome(
                PipelineStatus.DENIED,
                message=message,
                verdict=verdict,
                command=command,
                denial=denial,
                reply_text=self._t(denial.message_key, command=command.name),
            )

        result = self.cooldowns.check(
            command.name, self.actor_key(command, message), self.cooldown_for(command)
        )
        if not result.allowed:
            logger.debug(
                f"Кулдаун '{command.name}' для {message.sender_id}: осталось {result.remaining_ms}мс"
            )
            return PipelineOutcome(
                PipelineStatus.COOLDOWN,
                message=message,
                verdict=verdict,
                command=command,
                remaining_ms=result.remaining_ms,
                reply_text=self._t(
                    "ERRORS.COOLDOWN", command=command.name, seconds=result.remaining_seconds
                ),
            )

        return PipelineOutcome(PipelineStatus.EXECUTED, message=message, verdict=verdict, command=command)

    async def process(self, raw: Any, reply: Optional[ReplyFunc] = None) -> PipelineOutcome:
        received_at = self.clock()
        message = normalize_event(raw)
        if not message:
            return PipelineOutcome(PipelineStatus.ABORTED)

        async with self._locks.hold(message.sender_id):
            outcome = await self._admit(message)

        if outcome.status != PipelineStatus.EXECUTED:
            if outcome.reply_text and reply is not None:
                await self._send(reply, outcome.reply_text, message)
            return outcome

        _, args = self.parse(message.text)
        ctx = CommandContext(
            message=message,
            args=args,
            command=outcome.command,
            reply=reply or _discard_reply,
            localizer=self.localizer,
            prefix=self.prefix,
            raw=raw,
            received_at=received_at,
        )
        if not await self.dispatcher.execute(outcome.command, ctx):
            outcome.status = PipelineStatus.FAILED
        return outcome

    async def _send(self, reply: ReplyFunc, text: str, message: NormalizedMessage) -> None:
        try:
            await reply(text)
        except Exception as e:
            logger.error(f"Не удалось отправить ответ в {message.conversation_id}: {e}")

    # ------------------------------------------------------------------
    # Статистика
    # ------------------------------------------------------------------

    def stats(self) -> dict:
        return {
            "uptime": self.dispatcher.uptime,
            "commands_handled": self.dispatcher.commands_handled,
            "commands_failed": self.dispatcher.commands_failed,
            "users_served": self.dispatcher.users_served,
            "security_blocks": self.gate.blocked_total,
        }

    def report(self) -> dict:
        return {**self.gate.report(), "cooldowns": len(self.cooldowns), "commands": len(self.registry)}


async def _discard_reply(text: str) -> None:
    logger.debug(f"Ответ без транспорта отброшен: {text[:80]!r}")
