from datetime import datetime

from aiogram.types import Chat, Message, User

from gatekeeper.services.normalizer import NO_TEXT, NormalizedMessage, normalize_event


def make_aiogram(**kwargs):
    data = dict(
        message_id=1,
        date=datetime.now(),
        chat=Chat(id=10, type="private"),
        from_user=User(id=10, is_bot=False, first_name="t"),
    )
    data.update(kwargs)
    return Message(**data)


def test_aiogram_text_message():
    result = normalize_event(make_aiogram(text="/ping"))
    assert result == NormalizedMessage(text="/ping", sender_id="10", conversation_id="10", is_group=False)


def test_aiogram_group_caption():
    message = make_aiogram(
        chat=Chat(id=-100, type="supergroup"),
        from_user=User(id=7, is_bot=False, first_name="t"),
        caption="look at this",
    )
    result = normalize_event(message)
    assert result.text == "look at this"
    assert result.sender_id == "7"
    assert result.conversation_id == "-100"
    assert result.is_group


def test_aiogram_sender_chat_fallback():
    message = make_aiogram(
        chat=Chat(id=-100, type="supergroup"),
        from_user=None,
        sender_chat=Chat(id=-200, type="channel"),
        text="post",
    )
    assert normalize_event(message).sender_id == "-200"


def test_events_without_text_abort():
    assert normalize_event(make_aiogram()) is NO_TEXT
    assert normalize_event(make_aiogram(text="   ")) is NO_TEXT
    assert normalize_event({"sender_id": 1}) is NO_TEXT
    assert normalize_event({"text": "hi"}) is NO_TEXT
    assert normalize_event(object()) is NO_TEXT
    assert not NO_TEXT


def test_mapping_event():
    result = normalize_event({"text": "hi", "from_id": 5, "chat_id": -1, "chat_type": "group"})
    assert result == NormalizedMessage(text="hi", sender_id="5", conversation_id="-1", is_group=True)

    result = normalize_event({"text": "hi", "chat_id": 9})
    assert result.sender_id == "9"
    assert not result.is_group
