# gatekeeper/startup/setup.py
from aiogram import Bot, Dispatcher
from loguru import logger

from gatekeeper.containers import Container
from gatekeeper.handlers import router


def setup_bot(container: Container) -> tuple[Bot, Dispatcher]:
    logger.info("🤖 Setting up bot and dispatcher...")

    bot = container.bot()
    dispatcher = Dispatcher()
    dispatcher["gatekeeper"] = container.gatekeeper_service()
    dispatcher.include_router(router)

    logger.info("✅ Bot and dispatcher configured")
    return bot, dispatcher
