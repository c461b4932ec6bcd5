# =============================================================================
# Файл: gatekeeper/utils/logging_setup.py
# Описание:
#   • Настройка логирования через loguru
#   • JSON-формат для structured logging
#   • Отдельный sink для аудита выполненных команд
#   • Перехват стандартного logging
# =============================================================================

import logging
import sys
from typing import Iterable, Literal, Optional

from loguru import logger

NOISY_LOGGERS = (
    "aiogram",
    "aiohttp",
    "asyncio",
    "apscheduler",
)


class InterceptHandler(logging.Handler):
    """
    Перехватчик стандартных логов Python и перенаправление в loguru.
    Нужен для библиотек, которые пишут через стандартный logging.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Находим правильный caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _is_audit(record) -> bool:
    return bool(record["extra"].get("audit"))


def setup_logging(
    level: str = "INFO",
    format: Literal["text", "json"] = "text",
    audit_path: Optional[str] = None,
    debug_loggers: Iterable[str] = (),
) -> None:
    """
    Настраивает систему логирования для всего приложения.

    Args:
        level: Уровень логирования ("DEBUG", "INFO", "WARNING", "ERROR")
        format: Формат вывода ("text" или "json")
        audit_path: Файл для записей аудита; None - только stdout
        debug_loggers: Стандартные логгеры, которым оставить DEBUG
    """
    logger.remove()

    if format == "json":
        # serialize=True дает одну JSON-строку на запись, включая extra
        logger.add(
            sys.stdout,
            level=level.upper(),
            serialize=True,
            backtrace=True,
            diagnose=False,
        )
    else:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stdout,
            format=log_format,
            level=level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    if audit_path:
        logger.add(
            audit_path,
            level="INFO",
            filter=_is_audit,
            serialize=True,
            rotation="10 MB",
            retention=5,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    for logger_name in debug_loggers:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)

    logger.info(f"✅ Logging configured: level={level.upper()}, format={format}")
