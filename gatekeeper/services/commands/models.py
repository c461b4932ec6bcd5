# gatekeeper/services/commands/models.py
"""
Модели команд и контекста вызова.
"""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, FrozenSet, Iterable, List, Optional, Union

from gatekeeper.services.normalizer import NormalizedMessage

if TYPE_CHECKING:
    from gatekeeper.services.localization import Localizer

ReplyFunc = Callable[[str], Awaitable[Any]]


class CooldownScope(str, Enum):
    SENDER = "sender"
    CONVERSATION = "conversation"


@dataclass
class CommandContext:
    """
    То, что получает обработчик команды.

    Ответ пользователю - целиком ответственность команды, через reply().
    """
    message: NormalizedMessage
    args: List[str]
    command: "Command"
    reply: ReplyFunc
    localizer: "Localizer"
    prefix: str = "/"
    raw: Any = None
    received_at: float = field(default_factory=time.time)

    @property
    def actor(self) -> str:
        return self.message.sender_id

    def t(self, key: str, **variables: Any) -> str:
        variables.setdefault("prefix", self.prefix)
        variables.setdefault("command", self.command.name)
        return self.localizer.lookup(key, variables)


Handler = Callable[[CommandContext], Awaitable[Any]]


@dataclass(frozen=True)
class Command:
    name: str
    handler: Handler
    aliases: FrozenSet[str] = frozenset()
    category: str = "general"
    description: str = ""
    usage: str = ""
    owner_only: bool = False
    admin_only: bool = False
    group_only: bool = False
    private_only: bool = False
    cooldown_seconds: Optional[float] = None
    cooldown_scope: CooldownScope = CooldownScope.SENDER
    hidden: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", (self.name or "").strip().lower())
        aliases: Union[str, Iterable[str]] = self.aliases or ()
        if isinstance(aliases, str):
            aliases = (aliases,)
        object.__setattr__(
            self, "aliases", frozenset(a.strip().lower() for a in aliases if a and a.strip())
        )
        object.__setattr__(self, "cooldown_scope", CooldownScope(self.cooldown_scope))

    @property
    def restricted(self) -> bool:
        return self.owner_only or self.admin_only
