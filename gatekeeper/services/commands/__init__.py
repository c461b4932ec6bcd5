# gatekeeper/services/commands/__init__.py
"""
Реестр команд, проверка прав, кулдауны и выполнение.
"""

from gatekeeper.services.commands.cooldowns import CooldownManager, CooldownResult
from gatekeeper.services.commands.dispatcher import AuditRecord, CommandDispatcher
from gatekeeper.services.commands.models import (
    Command,
    CommandContext,
    CooldownScope,
    Handler,
    ReplyFunc,
)
from gatekeeper.services.commands.permissions import PermissionChecker, PermissionDenial
from gatekeeper.services.commands.registry import CommandRegistry

__all__ = [
    "AuditRecord",
    "Command",
    "CommandContext",
    "CommandDispatcher",
    "CommandRegistry",
    "CooldownManager",
    "CooldownResult",
    "CooldownScope",
    "Handler",
    "PermissionChecker",
    "PermissionDenial",
    "ReplyFunc",
]
