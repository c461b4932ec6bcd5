# gatekeeper/services/commands/cooldowns.py
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple


@dataclass(frozen=True)
class CooldownResult:
    allowed: bool
    remaining_ms: int = 0

    @property
    def remaining_seconds(self) -> int:
        return math.ceil(self.remaining_ms / 1000)


class CooldownManager:
    """
    Минимальный интервал между вызовами одной команды одним актором.

    Запись живет ttl_seconds с момента последней записи независимо от
    длины кулдауна команды, поэтому кулдаун длиннее ttl фактически
    ограничен ttl.
    """

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[Tuple[str, str], float] = {}

    def check(self, command_name: str, actor_key: str, cooldown_seconds: float) -> CooldownResult:
        key = (command_name, actor_key)
        now = self.clock()
        last = self._entries.get(key)

        if last is not None and now - last >= self.ttl_seconds:
            del self._entries[key]
            last = None

        if last is None or now - last >= cooldown_seconds:
            self._entries[key] = now
            return CooldownResult(allowed=True)

        remaining_ms = math.ceil((cooldown_seconds - (now - last)) * 1000)
        return CooldownResult(allowed=False, remaining_ms=remaining_ms)

    def reset(self, actor_key: str, command_name: Optional[str] = None) -> int:
        """Снимает кулдауны актора: все или только указанной команды."""
        keys = [
            key for key in self._entries
            if key[1] == actor_key and (command_name is None or key[0] == command_name)
        ]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def sweep(self) -> int:
        boundary = self.clock() - self.ttl_seconds
        stale = [key for key, written in self._entries.items() if written <= boundary]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._entries)
