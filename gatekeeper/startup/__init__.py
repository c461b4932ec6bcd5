# gatekeeper/startup/__init__.py
from gatekeeper.startup.lifecycle import init_resources, on_shutdown, on_startup, shutdown_resources
from gatekeeper.startup.polling import start_polling
from gatekeeper.startup.setup import setup_bot

__all__ = [
    "init_resources",
    "shutdown_resources",
    "setup_bot",
    "on_startup",
    "on_shutdown",
    "start_polling",
]
