# gatekeeper/handlers/message_handler.py
"""
Транспорт: каждое входящее сообщение aiogram отдается в конвейер.
"""
import contextlib

from aiogram import Router
from aiogram.types import Message
from loguru import logger

from gatekeeper.services.gatekeeper_service import GatekeeperService

router = Router(name="gatekeeper")


@router.message()
async def handle_message(message: Message, gatekeeper: GatekeeperService) -> None:
    """
    `gatekeeper` приходит из workflow data диспетчера.
    """
    outcome = await gatekeeper.process(message, reply=message.reply)

    if outcome.delete_message:
        with contextlib.suppress(Exception):
            await message.delete()
            logger.debug(f"Сообщение {message.message_id} в чате {message.chat.id} удалено")
