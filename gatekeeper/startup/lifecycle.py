# gatekeeper/startup/lifecycle.py
from typing import Optional

from aiogram import Bot
from loguru import logger

from gatekeeper.config.settings import settings
from gatekeeper.containers import Container
from gatekeeper.services.gatekeeper_service import GatekeeperService


async def init_resources(container: Container) -> None:
    logger.info("🔧 Initializing container resources...")

    if settings.storage.backend == "redis":
        try:
            await container.redis_client().ping()
            logger.info("✅ Redis connected")
        except Exception as e:
            logger.error(f"❌ Redis connection failed: {e}")
            raise

    await container.gatekeeper_service().start()


async def shutdown_resources(container: Container) -> None:
    logger.info("🛑 Shutting down container resources...")

    try:
        await container.gatekeeper_service().shutdown()
    except Exception as e:
        logger.error(f"Error stopping gatekeeper service: {e}")

    if settings.storage.backend == "redis":
        try:
            await container.redis_client().aclose()
            logger.info("✅ Redis client closed")
        except Exception as e:
            logger.error(f"Error closing Redis: {e}")


async def on_startup(bot: Bot, service: Optional[GatekeeperService] = None) -> None:
    logger.info("🚀 Starting bot...")

    try:
        await bot.delete_webhook(drop_pending_updates=True)
        logger.info("✅ Webhook deleted, pending updates dropped")
    except Exception as e:
        logger.warning(f"⚠️ Failed to delete webhook: {e}")

    bot_info = await bot.get_me()
    logger.info(f"✅ Bot started: @{bot_info.username} (ID: {bot_info.id})")
    if service is not None:
        # Для команд вида /help@username в группах
        service.bot_username = bot_info.username


async def on_shutdown(bot: Bot) -> None:
    logger.info("🛑 Shutting down bot...")
    try:
        await bot.session.close()
        logger.info("✅ Bot session closed")
    except Exception as e:
        logger.error(f"Error closing bot session: {e}")
