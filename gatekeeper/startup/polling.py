# gatekeeper/startup/polling.py
import asyncio
import signal

from aiogram import Bot, Dispatcher
from loguru import logger

from gatekeeper.startup.lifecycle import on_shutdown, on_startup


async def start_polling(bot: Bot, dp: Dispatcher) -> None:
    logger.info("🔄 Starting polling mode...")

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass

    try:
        await on_startup(bot, dp.workflow_data.get("gatekeeper"))

        polling_task = asyncio.create_task(
            dp.start_polling(
                bot,
                allowed_updates=dp.resolve_used_update_types(),
                handle_signals=False,
                handle_as_tasks=True,
            )
        )

        waiter = asyncio.create_task(shutdown_event.wait())
        done, _ = await asyncio.wait(
            {polling_task, waiter}, return_when=asyncio.FIRST_COMPLETED
        )
        waiter.cancel()
        if polling_task not in done:
            logger.info("🛑 Shutdown signal received, stopping polling...")
            polling_task.cancel()
        try:
            await polling_task
        except asyncio.CancelledError:
            logger.info("✅ Polling cancelled")

    except Exception as e:
        logger.opt(exception=True).error(f"❌ Error in polling: {e}")
    finally:
        await on_shutdown(bot)
