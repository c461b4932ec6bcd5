import pytest

from gatekeeper.services.commands import Command, PermissionChecker, PermissionDenial
from tests.helpers import make_message


async def noop(ctx):
    return None


@pytest.fixture
def checker():
    return PermissionChecker(owner_ids=["1"], admin_ids=["2"])


def test_owner_only(checker):
    command = Command(name="block", handler=noop, owner_only=True)
    assert checker.check(command, make_message(sender="1")) is None
    assert checker.check(command, make_message(sender="2")) == PermissionDenial.OWNER_ONLY
    assert checker.check(command, make_message(sender="3")) == PermissionDenial.OWNER_ONLY


def test_owner_counts_as_admin(checker):
    command = Command(name="security", handler=noop, admin_only=True)
    assert checker.check(command, make_message(sender="1")) is None
    assert checker.check(command, make_message(sender="2")) is None
    assert checker.check(command, make_message(sender="3")) == PermissionDenial.ADMIN_ONLY


def test_chat_kind_flags(checker):
    group_cmd = Command(name="g", handler=noop, group_only=True)
    private_cmd = Command(name="p", handler=noop, private_only=True)
    group_msg = make_message(chat="-10", is_group=True)
    private_msg = make_message()

    assert checker.check(group_cmd, group_msg) is None
    assert checker.check(group_cmd, private_msg) == PermissionDenial.GROUP_ONLY
    assert checker.check(private_cmd, private_msg) is None
    assert checker.check(private_cmd, group_msg) == PermissionDenial.PRIVATE_ONLY


def test_checks_run_in_fixed_order(checker):
    command = Command(name="x", handler=noop, owner_only=True, admin_only=True, group_only=True)
    assert checker.check(command, make_message(sender="3")) == PermissionDenial.OWNER_ONLY
    assert checker.check(command, make_message(sender="1")) == PermissionDenial.GROUP_ONLY
    assert PermissionDenial.GROUP_ONLY.message_key == "ERRORS.ONLY_GROUP"
