# gatekeeper/services/security/rate_limiter.py
import math
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    retry_after: int = 0


class SlidingWindowRateLimiter:
    """
    Скользящее окно: хранит отметки времени попыток за последние
    window_seconds секунд. Старые отметки удаляются при обращении и sweep().
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, Deque[float]] = {}

    def _prune(self, window: Deque[float], now: float) -> None:
        boundary = now - self.window_seconds
        while window and window[0] <= boundary:
            window.popleft()

    def hit(self, key: str) -> RateLimitResult:
        """Учитывает попытку; отклоненная попытка слот не занимает."""
        now = self.clock()
        window = self._windows.setdefault(key, deque())
        self._prune(window, now)

        if len(window) >= self.max_requests:
            retry_after = math.ceil(window[0] + self.window_seconds - now)
            return RateLimitResult(allowed=False, retry_after=max(1, retry_after))

        window.append(now)
        return RateLimitResult(allowed=True)

    def count(self, key: str) -> int:
        window = self._windows.get(key)
        if not window:
            return 0
        self._prune(window, self.clock())
        return len(window)

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)

    def sweep(self) -> int:
        """Удаляет устаревшие отметки и пустые окна. Возвращает число удаленных окон."""
        now = self.clock()
        removed = 0
        for key in list(self._windows):
            window = self._windows[key]
            self._prune(window, now)
            if not window:
                del self._windows[key]
                removed += 1
        return removed

    def __len__(self) -> int:
        return len(self._windows)
