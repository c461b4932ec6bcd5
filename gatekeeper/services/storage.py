# gatekeeper/services/storage.py
"""
Хранилища списков идентификаторов (черный и белый списки).

Список всегда перезаписывается целиком, порядок элементов не важен.
"""
import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Protocol, Set, Tuple

from loguru import logger
from redis.asyncio import Redis

from gatekeeper.utils.exceptions import StorageError


class IdListStore(Protocol):
    async def load(self, name: str) -> Set[str]: ...

    async def save(self, name: str, ids: Iterable[str]) -> None: ...


class JsonIdListStore:
    """Один JSON-массив строк на список: <data_dir>/<name>.json."""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def _read(self, path: Path) -> Set[str]:
        if not path.exists():
            return set()
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path}: ожидается JSON-массив")
        return {str(item) for item in data}

    def _write(self, path: Path, ids: list) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(ids, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    async def load(self, name: str) -> Set[str]:
        path = self.path_for(name)
        try:
            return await asyncio.to_thread(self._read, path)
        except (OSError, ValueError) as e:
            raise StorageError(f"Не удалось прочитать {path}: {e}") from e

    async def save(self, name: str, ids: Iterable[str]) -> None:
        path = self.path_for(name)
        try:
            await asyncio.to_thread(self._write, path, sorted(ids))
        except OSError as e:
            raise StorageError(f"Не удалось записать {path}: {e}") from e
        logger.debug(f"Список '{name}' сохранен в {path}")


class RedisIdListStore:
    """Один Redis SET на список: <prefix>:list:<name>."""

    def __init__(self, redis: Redis, key_prefix: str = "gatekeeper"):
        self.redis = redis
        self.key_prefix = key_prefix.strip(":")

    def key_for(self, name: str) -> str:
        return f"{self.key_prefix}:list:{name}"

    async def load(self, name: str) -> Set[str]:
        try:
            members = await self.redis.smembers(self.key_for(name))
        except Exception as e:
            raise StorageError(f"Не удалось прочитать список '{name}' из Redis: {e}") from e
        return {m.decode() if isinstance(m, bytes) else str(m) for m in members}

    async def save(self, name: str, ids: Iterable[str]) -> None:
        key = self.key_for(name)
        ids = list(ids)
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(key)
                if ids:
                    pipe.sadd(key, *ids)
                await pipe.execute()
        except Exception as e:
            raise StorageError(f"Не удалось записать список '{name}' в Redis: {e}") from e


class JsonAliasFile:
    """
    Пользовательские алиасы команд: JSON-массив объектов {"alias", "command"}.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def _read(self) -> List[Tuple[str, str]]:
        if not self.path.exists():
            return []
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{self.path}: ожидается JSON-массив")

        pairs = []
        for item in data:
            if not isinstance(item, dict) or not isinstance(item.get("alias"), str) \
                    or not isinstance(item.get("command"), str):
                raise ValueError(f"{self.path}: ожидаются объекты вида {{\"alias\", \"command\"}}")
            pairs.append((item["alias"], item["command"]))
        return pairs

    async def load(self) -> List[Tuple[str, str]]:
        try:
            return await asyncio.to_thread(self._read)
        except (OSError, ValueError) as e:
            raise StorageError(f"Не удалось прочитать алиасы из {self.path}: {e}") from e
