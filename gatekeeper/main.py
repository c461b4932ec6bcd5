# gatekeeper/main.py
import asyncio
import sys

from aiohttp import web
from loguru import logger

from gatekeeper.config.settings import settings
from gatekeeper.containers import Container
from gatekeeper.services.gatekeeper_service import GatekeeperService
from gatekeeper.startup import init_resources, setup_bot, shutdown_resources, start_polling
from gatekeeper.utils.logging_setup import setup_logging


def create_health_app(service: GatekeeperService) -> web.Application:
    async def health_check(request: web.Request) -> web.Response:
        return web.json_response(
            {
                "status": "ok",
                "service": settings.logging.service_name,
                "security": service.report(),
                "stats": service.stats(),
            }
        )

    app = web.Application()
    app.router.add_get("/health", health_check)
    app.router.add_get("/healthz", health_check)
    return app


async def run_health_server(service: GatekeeperService) -> None:
    runner = web.AppRunner(create_health_app(service))
    await runner.setup()

    site = web.TCPSite(runner, "0.0.0.0", settings.PORT)
    await site.start()

    logger.info(f"🏥 Health check server started on 0.0.0.0:{settings.PORT}")

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await runner.cleanup()


async def run_bot(container: Container) -> None:
    bot, dp = setup_bot(container)
    await start_polling(bot, dp)


async def main_async() -> None:
    container = Container()
    await init_resources(container)

    try:
        service = container.gatekeeper_service()
        if settings.IS_WEB_PROCESS:
            logger.info("🌐 Starting in WEB mode (bot + health server)")
            health_task = asyncio.create_task(run_health_server(service))
            try:
                await run_bot(container)
            finally:
                health_task.cancel()
        else:
            logger.info("🤖 Starting in WORKER mode (bot only)")
            await run_bot(container)
    finally:
        await shutdown_resources(container)


def main() -> None:
    setup_logging(
        level=settings.log_level,
        format="json" if settings.logging.json_enabled else "text",
        audit_path=settings.logging.audit_path,
        debug_loggers=settings.logging.debug_loggers,
    )

    if not settings.bot_token:
        logger.critical("Bot token not found. Please set BOT_TOKEN in your .env file.")
        sys.exit(1)

    logger.info("=" * 60)
    logger.info(f"🛡 Gatekeeper bot, prefix '{settings.PREFIX}', language {settings.LANGUAGE}")
    logger.info(f"📝 Log level: {settings.log_level}")
    logger.info(f"💾 Storage: {settings.storage.backend}")
    logger.info("=" * 60)

    try:
        asyncio.run(main_async())
    except KeyboardInterrupt:
        logger.info("⚠️ Received KeyboardInterrupt")
    except Exception as e:
        logger.opt(exception=True).error(f"❌ Fatal error: {e}")
        sys.exit(1)
    finally:
        logger.info("👋 Bot stopped")


if __name__ == "__main__":
    main()
