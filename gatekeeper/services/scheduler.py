# gatekeeper/services/scheduler.py
from typing import TYPE_CHECKING, Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from gatekeeper.config.models import SweepConfig

if TYPE_CHECKING:
    from gatekeeper.services.gatekeeper_service import GatekeeperService


def _sweep_job(name: str, sweep: Callable[[], int]) -> Callable[[], Awaitable[None]]:
    # Корутина выполняется в цикле событий, а не в пуле потоков,
    # поэтому очистка не пересекается с обработкой событий
    async def job() -> None:
        removed = sweep()
        if removed:
            logger.debug(f"Очистка {name}: удалено {removed}")
    job.__name__ = f"sweep_{name}"
    return job


def setup_scheduler(service: "GatekeeperService", sweeps: SweepConfig) -> AsyncIOScheduler:
    """
    Настраивает периодические очистки состояния сервиса.

    У каждой очистки не больше одного активного экземпляра
    (max_instances=1), пропущенные запуски схлопываются.
    """
    scheduler = AsyncIOScheduler(
        job_defaults={"max_instances": 1, "coalesce": True, "misfire_grace_time": 30},
    )

    scheduler.add_job(
        _sweep_job("rate_windows", service.sweep_rate_windows), "interval",
        seconds=sweeps.rate_window_seconds, id="sweep_rate_windows", replace_existing=True,
    )
    scheduler.add_job(
        _sweep_job("cooldowns", service.sweep_cooldowns), "interval",
        seconds=sweeps.cooldown_seconds, id="sweep_cooldowns", replace_existing=True,
    )
    scheduler.add_job(
        _sweep_job("warnings", service.sweep_warnings), "interval",
        seconds=sweeps.warning_seconds, id="sweep_warnings", replace_existing=True,
    )

    logger.info("Scheduler configured with sweep jobs.")
    return scheduler
