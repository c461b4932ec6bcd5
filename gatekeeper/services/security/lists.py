# gatekeeper/services/security/lists.py
"""
Черный и белый списки идентификаторов.
"""
import asyncio
from typing import Iterable, Optional, Set

from loguru import logger

from gatekeeper.services.storage import IdListStore
from gatekeeper.utils.exceptions import StorageError

BLACKLIST = "blacklist"
WHITELIST = "whitelist"


class BlockLists:
    """
    Держит списки в памяти и сохраняет черный список при каждом изменении.

    Память остается источником истины: ошибка записи только логируется.
    """

    def __init__(
        self,
        store: Optional[IdListStore] = None,
        blocked_ids: Iterable[str] = (),
        allowed_ids: Iterable[str] = (),
    ):
        self.store = store
        self.blacklist: Set[str] = {str(i) for i in blocked_ids}
        self.whitelist: Set[str] = {str(i) for i in allowed_ids}
        self._persist_lock = asyncio.Lock()

    async def load(self) -> None:
        """Подмешивает к спискам из конфигурации сохраненные идентификаторы."""
        if self.store is None:
            return
        for name, target in ((BLACKLIST, self.blacklist), (WHITELIST, self.whitelist)):
            try:
                target.update(await self.store.load(name))
            except StorageError as e:
                logger.warning(f"Не удалось загрузить список '{name}': {e}")
        logger.info(
            f"Списки загружены: blacklist={len(self.blacklist)}, whitelist={len(self.whitelist)}"
        )

    def is_blacklisted(self, *ids: str) -> bool:
        return any(i in self.blacklist for i in ids)

    def admits(self, *ids: str) -> bool:
        """Пустой белый список означает отсутствие ограничений."""
        if not self.whitelist:
            return True
        return any(i in self.whitelist for i in ids)

    async def add_to_blacklist(self, identifier: str) -> bool:
        """Возвращает False, если идентификатор уже был в списке."""
        if identifier in self.blacklist:
            return False
        self.blacklist.add(identifier)
        await self.persist(BLACKLIST)
        return True

    async def remove_from_blacklist(self, identifier: str) -> bool:
        if identifier not in self.blacklist:
            return False
        self.blacklist.discard(identifier)
        await self.persist(BLACKLIST)
        return True

    async def persist(self, name: str = BLACKLIST) -> bool:
        if self.store is None:
            return False
        ids = self.blacklist if name == BLACKLIST else self.whitelist
        async with self._persist_lock:
            try:
                await self.store.save(name, set(ids))
            except StorageError as e:
                logger.error(f"Не удалось сохранить список '{name}': {e}")
                return False
        return True
