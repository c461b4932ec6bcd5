# gatekeeper/services/security/checks/access_check.py
from typing import Optional

from gatekeeper.services.normalizer import NormalizedMessage
from gatekeeper.services.security.checks.base import BaseCheck
from gatekeeper.services.security.lists import BlockLists
from gatekeeper.services.security.models import SecurityReason, SecurityVerdict


class BlacklistCheck(BaseCheck):
    name = "blacklist"

    def __init__(self, lists: BlockLists):
        self.lists = lists

    async def check(self, message: NormalizedMessage) -> Optional[SecurityVerdict]:
        if self.lists.is_blacklisted(message.sender_id, message.conversation_id):
            return SecurityVerdict.block(SecurityReason.BLACKLISTED)
        return None


class WhitelistCheck(BaseCheck):
    name = "whitelist"

    def __init__(self, lists: BlockLists):
        self.lists = lists

    async def check(self, message: NormalizedMessage) -> Optional[SecurityVerdict]:
        if not self.lists.admits(message.sender_id, message.conversation_id):
            return SecurityVerdict.block(SecurityReason.NOT_WHITELISTED)
        return None
