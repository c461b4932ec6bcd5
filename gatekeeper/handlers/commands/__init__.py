# gatekeeper/handlers/commands/__init__.py
from typing import TYPE_CHECKING, List

from gatekeeper.handlers.commands.admin import admin_commands
from gatekeeper.handlers.commands.general import general_commands
from gatekeeper.services.commands import Command

if TYPE_CHECKING:
    from gatekeeper.services.gatekeeper_service import GatekeeperService


def builtin_commands(service: "GatekeeperService") -> List[Command]:
    return general_commands(service) + admin_commands(service)


__all__ = ["builtin_commands", "admin_commands", "general_commands"]
