import json
from unittest.mock import AsyncMock

import pytest
from loguru import logger

from gatekeeper.services.commands import Command, CommandContext, CommandDispatcher
from gatekeeper.services.localization import Localizer
from gatekeeper.utils.logging_setup import setup_logging
from tests.helpers import FakeClock, make_message


@pytest.mark.asyncio
async def test_audit_sink_receives_only_audit_records(tmp_path):
    audit_file = tmp_path / "audit.log"
    setup_logging(level="DEBUG", format="json", audit_path=str(audit_file))
    try:
        async def handler(ctx):
            return None

        command = Command(name="ping", handler=handler)
        ctx = CommandContext(
            message=make_message("/ping", sender="42"),
            args=[],
            command=command,
            reply=AsyncMock(),
            localizer=Localizer(),
        )
        logger.info("not an audit record")
        assert await CommandDispatcher(clock=FakeClock()).execute(command, ctx)
    finally:
        logger.remove()

    lines = audit_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    extra = json.loads(lines[0])["record"]["extra"]
    assert extra["audit"] is True
    assert extra["command"] == "ping"
    assert extra["actor"] == "42"
