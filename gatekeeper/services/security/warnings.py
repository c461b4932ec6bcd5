# gatekeeper/services/security/warnings.py
import time
from typing import Callable, Dict, Optional

from gatekeeper.services.security.models import SecurityReason, SecurityRecord, WarningEntry


class WarningTracker:
    """
    Счетчики предупреждений по отправителям.

    Решение о блокировке принимает шлюз, трекер только ведет историю.
    Предупреждения старше ttl_seconds удаляются sweep(), счетчик
    пересчитывается по оставшимся.
    """

    def __init__(self, ttl_seconds: float = 24 * 3600, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._records: Dict[str, SecurityRecord] = {}

    def add(self, sender_id: str, reason: SecurityReason) -> SecurityRecord:
        record = self._records.get(sender_id)
        if record is None:
            record = self._records[sender_id] = SecurityRecord(sender_id=sender_id)
        record.warning_history.append(WarningEntry(timestamp=self.clock(), reason=reason))
        record.warning_count += 1
        return record

    def get(self, sender_id: str) -> Optional[SecurityRecord]:
        return self._records.get(sender_id)

    def reset(self, sender_id: str) -> bool:
        return self._records.pop(sender_id, None) is not None

    def sweep(self) -> int:
        boundary = self.clock() - self.ttl_seconds
        removed = 0
        for sender_id in list(self._records):
            record = self._records[sender_id]
            recent = [w for w in record.warning_history if w.timestamp > boundary]
            if not recent:
                del self._records[sender_id]
                removed += 1
            elif len(recent) != len(record.warning_history):
                record.warning_history = recent
                record.warning_count = len(recent)
        return removed

    def __len__(self) -> int:
        return len(self._records)
