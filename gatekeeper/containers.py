# gatekeeper/containers.py
import os

from aiogram import Bot
from dependency_injector import containers, providers
from redis.asyncio import Redis

from gatekeeper.config.settings import settings
from gatekeeper.handlers.commands import builtin_commands
from gatekeeper.services.commands import (
    CommandDispatcher,
    CommandRegistry,
    CooldownManager,
    PermissionChecker,
)
from gatekeeper.services.gatekeeper_service import GatekeeperService
from gatekeeper.services.localization import Localizer
from gatekeeper.services.security import BlockLists, SecurityGate
from gatekeeper.services.storage import JsonAliasFile, JsonIdListStore, RedisIdListStore


def create_gatekeeper_service(**kwargs) -> GatekeeperService:
    """Собирает сервис и регистрирует встроенные команды."""
    service = GatekeeperService(**kwargs)
    service.registry.register_all(builtin_commands(service))
    return service


class Container(containers.DeclarativeContainer):
    """DI контейнер приложения"""

    redis_client = providers.Singleton(
        Redis.from_url,
        url=settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_keepalive=True,
        health_check_interval=30,
    )

    id_list_store = providers.Selector(
        providers.Object(settings.storage.backend),
        json=providers.Singleton(JsonIdListStore, data_dir=settings.storage.data_dir),
        redis=providers.Singleton(
            RedisIdListStore,
            redis=redis_client,
            key_prefix=settings.storage.key_prefix,
        ),
    )

    alias_file = providers.Singleton(
        JsonAliasFile,
        path=os.path.join(settings.storage.data_dir, settings.storage.aliases_file),
    )

    block_lists = providers.Singleton(
        BlockLists,
        store=id_list_store,
        blocked_ids=settings.blocked_ids,
        allowed_ids=settings.allowed_ids,
    )

    localizer = providers.Singleton(
        Localizer,
        language=settings.LANGUAGE,
        languages_dir=settings.LANGUAGES_DIR,
    )

    security_gate = providers.Singleton(
        SecurityGate,
        config=settings.security,
        lists=block_lists,
    )

    command_registry = providers.Singleton(CommandRegistry)

    permission_checker = providers.Singleton(
        PermissionChecker,
        owner_ids=settings.owner_ids,
        admin_ids=settings.admin_ids,
    )

    cooldown_manager = providers.Singleton(
        CooldownManager,
        ttl_seconds=settings.commands.cooldown_ttl_seconds,
    )

    command_dispatcher = providers.Singleton(
        CommandDispatcher,
        audit_history=settings.commands.audit_history,
    )

    gatekeeper_service = providers.Singleton(
        create_gatekeeper_service,
        gate=security_gate,
        registry=command_registry,
        permissions=permission_checker,
        cooldowns=cooldown_manager,
        dispatcher=command_dispatcher,
        localizer=localizer,
        prefix=settings.PREFIX,
        default_cooldown_seconds=settings.commands.default_cooldown_seconds,
        silent_reasons=settings.security.silent_reasons,
        sweeps=settings.sweeps,
        alias_file=alias_file,
    )

    bot = providers.Singleton(
        Bot,
        token=settings.bot_token,
    )

