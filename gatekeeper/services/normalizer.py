# gatekeeper/services/normalizer.py
"""
Приведение входящего события к минимальному виду, не зависящему от платформы.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from aiogram.types import Message

GROUP_CHAT_TYPES = frozenset({"group", "supergroup", "channel"})


@dataclass(frozen=True)
class NormalizedMessage:
    text: str
    sender_id: str
    conversation_id: str
    is_group: bool


class _NoText:
    """Событие без извлекаемого текста. Конвейер прерывается молча."""

    _instance: Optional["_NoText"] = None

    def __new__(cls) -> "_NoText":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_TEXT"


NO_TEXT = _NoText()

NormalizeResult = Union[NormalizedMessage, _NoText]


def _as_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _from_aiogram(message: Message) -> NormalizeResult:
    text = message.text or message.caption
    if not text or not text.strip():
        return NO_TEXT

    conversation_id = _as_id(message.chat.id)
    sender_id = _as_id(message.from_user.id) if message.from_user else None
    if sender_id is None and message.sender_chat:
        sender_id = _as_id(message.sender_chat.id)

    return NormalizedMessage(
        text=text,
        sender_id=sender_id or conversation_id,
        conversation_id=conversation_id,
        is_group=message.chat.type in GROUP_CHAT_TYPES,
    )


def _from_mapping(event: Mapping[str, Any]) -> NormalizeResult:
    text = event.get("text") or event.get("caption")
    if not isinstance(text, str) or not text.strip():
        return NO_TEXT

    conversation_id = _as_id(event.get("conversation_id", event.get("chat_id")))
    sender_id = _as_id(event.get("sender_id", event.get("from_id")))
    if conversation_id is None and sender_id is None:
        return NO_TEXT

    if "is_group" in event:
        is_group = bool(event["is_group"])
    else:
        is_group = event.get("chat_type") in GROUP_CHAT_TYPES

    return NormalizedMessage(
        text=text,
        sender_id=sender_id or conversation_id,
        conversation_id=conversation_id or sender_id,
        is_group=is_group,
    )


def normalize_event(raw: Any) -> NormalizeResult:
    """
    Извлекает текст, отправителя, чат и признак группы из события.

    Поддерживает aiogram Message (текст или подпись к медиа) и словари
    вида {"text", "sender_id", "chat_id", "is_group"}. Идентификаторы
    приводятся к строкам. Если отправителя нет (личный чат), им
    считается сам чат.

    Returns:
        NormalizedMessage или NO_TEXT, если текста нет
    """
    if isinstance(raw, NormalizedMessage):
        return raw
    if isinstance(raw, Message):
        return _from_aiogram(raw)
    if isinstance(raw, Mapping):
        return _from_mapping(raw)
    return NO_TEXT
