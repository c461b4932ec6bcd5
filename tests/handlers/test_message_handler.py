from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from aiogram.types import Chat, Message, User

from gatekeeper.handlers.message_handler import handle_message


def make_message(text, user_id=100, chat_id=None, chat_type="private"):
    message = Message(
        message_id=1,
        date=datetime.now(),
        chat=Chat(id=chat_id or user_id, type=chat_type),
        from_user=User(id=user_id, is_bot=False, first_name="t"),
        text=text,
    )
    object.__setattr__(message, "reply", AsyncMock())
    object.__setattr__(message, "delete", AsyncMock())
    return message


@pytest.mark.asyncio
async def test_ping_replies(make_service):
    service = make_service(builtins=True)
    message = make_message("/ping")
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once()
    assert "Pong" in message.reply.await_args.args[0]
    message.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_forbidden_link_is_deleted(make_service):
    service = make_service(builtins=True)
    message = make_message("join t.me/somechannel", chat_id=-100, chat_type="supergroup")
    await handle_message(message, gatekeeper=service)
    message.delete.assert_awaited_once()
    assert "Warning 1/3" in message.reply.await_args.args[0]


@pytest.mark.asyncio
async def test_delete_failure_is_suppressed(make_service):
    service = make_service(builtins=True)
    message = make_message("https://example.com")
    message.delete.side_effect = RuntimeError("no rights")
    await handle_message(message, gatekeeper=service)
    message.delete.assert_awaited_once()


@pytest.mark.asyncio
async def test_help_hides_restricted_commands(make_service):
    service = make_service(builtins=True)

    message = make_message("/h")
    await handle_message(message, gatekeeper=service)
    text = message.reply.await_args.args[0]
    assert "/ping" in text
    assert "/block" not in text

    message = make_message("/menu", user_id=1)
    await handle_message(message, gatekeeper=service)
    text = message.reply.await_args.args[0]
    assert "/block <id> - Block an id" in text
    assert "MODERATION:" in text


@pytest.mark.asyncio
async def test_owner_blocks_and_unblocks(make_service, store):
    service = make_service(builtins=True)

    message = make_message("/ban 555", user_id=1)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("🚫 555 has been blocked.")
    assert store.lists["blacklist"] == {"555"}

    blocked = make_message("/ping", user_id=555)
    await handle_message(blocked, gatekeeper=service)
    blocked.reply.assert_awaited_once_with("🚫 You are blocked from using this bot.")

    message = make_message("/unblock 555", user_id=1)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("✅ 555 has been unblocked.")

    message = make_message("/unblock 555", user_id=1)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("ℹ️ 555 is not blocked.")


@pytest.mark.asyncio
async def test_block_requires_owner_and_target(make_service):
    service = make_service(builtins=True)

    message = make_message("/block 555", user_id=2)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("⛔ Only the bot owner can use this command.")

    message = make_message("/block", user_id=1)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("❌ Usage: /block <id>")


@pytest.mark.asyncio
async def test_admin_warning_commands(make_service):
    service = make_service(builtins=True)
    await handle_message(make_message("ABCDEFGHIJKLMNOPQRSTUVWxy", user_id=77), gatekeeper=service)

    message = make_message("/warnings 77", user_id=2)
    await handle_message(message, gatekeeper=service)
    text = message.reply.await_args.args[0]
    assert text.startswith("⚠️ 77: 1 warning(s)")
    assert "EXCESSIVE_CAPS" in text

    message = make_message("/resetwarn 77", user_id=2)
    await handle_message(message, gatekeeper=service)
    assert service.gate.get_record("77") is None

    message = make_message("/warnings 77", user_id=2)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("✅ 77 has no warnings.")

    message = make_message("/secreport", user_id=2)
    await handle_message(message, gatekeeper=service)
    assert message.reply.await_args.args[0].startswith("🛡 Security report")


@pytest.mark.asyncio
async def test_stats_command(make_service):
    service = make_service(builtins=True)
    await handle_message(make_message("/ping"), gatekeeper=service)

    message = make_message("/stats")
    await handle_message(message, gatekeeper=service)
    text = message.reply.await_args.args[0]
    assert "Commands handled: 1" in text
    assert "Users served: 1" in text


@pytest.mark.asyncio
async def test_resetcd_clears_cooldowns_and_rate_window(make_service):
    service = make_service(builtins=True, max_requests_per_minute=2)
    await handle_message(make_message("/stats", user_id=77), gatekeeper=service)
    await handle_message(make_message("hello", user_id=77), gatekeeper=service)

    limited = make_message("/ping", user_id=77)
    await handle_message(limited, gatekeeper=service)
    assert "Too many requests" in limited.reply.await_args.args[0]

    message = make_message("/resetcd 77", user_id=2)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("⏱ Cleared 1 cooldown(s) and the rate window of 77.")

    message = make_message("/stats", user_id=77)
    await handle_message(message, gatekeeper=service)
    assert "Bot statistics" in message.reply.await_args.args[0]


@pytest.mark.asyncio
async def test_audit_lists_recent_commands(make_service):
    service = make_service(builtins=True)

    message = make_message("/audit", user_id=2)
    await handle_message(message, gatekeeper=service)
    message.reply.assert_awaited_once_with("📜 No commands executed yet.")

    await handle_message(make_message("/ping", user_id=5), gatekeeper=service)
    message = make_message("/audit 5", user_id=2)
    await handle_message(message, gatekeeper=service)
    text = message.reply.await_args.args[0]
    assert text.startswith("📜 Last 2 command(s):")
    assert "/ping by 5" in text
    assert "/audit by 2" in text
