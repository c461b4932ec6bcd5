"""
Общие заглушки для тестов: управляемые часы, хранилище в памяти, сообщения.
"""
from gatekeeper.services.normalizer import NormalizedMessage


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MemoryStore:
    def __init__(self, **lists):
        self.lists = {name: set(ids) for name, ids in lists.items()}
        self.saves = []

    async def load(self, name):
        return set(self.lists.get(name, set()))

    async def save(self, name, ids):
        self.lists[name] = set(ids)
        self.saves.append((name, set(ids)))


def make_message(text="hello", sender="100", chat=None, is_group=False):
    return NormalizedMessage(
        text=text,
        sender_id=sender,
        conversation_id=chat or sender,
        is_group=is_group,
    )
