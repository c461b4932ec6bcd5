# gatekeeper/handlers/__init__.py
from gatekeeper.handlers.commands import builtin_commands
from gatekeeper.handlers.message_handler import router

__all__ = ["builtin_commands", "router"]
