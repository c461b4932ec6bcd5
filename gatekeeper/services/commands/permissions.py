# gatekeeper/services/commands/permissions.py
from enum import Enum
from typing import Iterable, Optional

from gatekeeper.services.commands.models import Command
from gatekeeper.services.normalizer import NormalizedMessage


class PermissionDenial(str, Enum):
    OWNER_ONLY = "OWNER_ONLY"
    ADMIN_ONLY = "ADMIN_ONLY"
    GROUP_ONLY = "GROUP_ONLY"
    PRIVATE_ONLY = "PRIVATE_ONLY"

    @property
    def message_key(self) -> str:
        return {
            PermissionDenial.OWNER_ONLY: "ERRORS.OWNER_ONLY",
            PermissionDenial.ADMIN_ONLY: "ERRORS.ADMIN_ONLY",
            PermissionDenial.GROUP_ONLY: "ERRORS.ONLY_GROUP",
            PermissionDenial.PRIVATE_ONLY: "ERRORS.ONLY_PRIVATE",
        }[self]


class PermissionChecker:
    """
    Проверка флагов доступа команды в фиксированном порядке:
    owner_only → admin_only → group_only → private_only.
    Владельцы считаются и администраторами.
    """

    def __init__(self, owner_ids: Iterable[str] = (), admin_ids: Iterable[str] = ()):
        self.owner_ids = frozenset(str(i) for i in owner_ids)
        self.admin_ids = frozenset(str(i) for i in admin_ids)

    def is_owner(self, sender_id: str) -> bool:
        return sender_id in self.owner_ids

    def is_admin(self, sender_id: str) -> bool:
        return sender_id in self.owner_ids or sender_id in self.admin_ids

    def check(self, command: Command, message: NormalizedMessage) -> Optional[PermissionDenial]:
        if command.owner_only and not self.is_owner(message.sender_id):
            return PermissionDenial.OWNER_ONLY
        if command.admin_only and not self.is_admin(message.sender_id):
            return PermissionDenial.ADMIN_ONLY
        if command.group_only and not message.is_group:
            return PermissionDenial.GROUP_ONLY
        if command.private_only and message.is_group:
            return PermissionDenial.PRIVATE_ONLY
        return None
