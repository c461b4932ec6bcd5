import json

import fakeredis.aioredis
import pytest
import pytest_asyncio

from gatekeeper.services.security import BlockLists
from gatekeeper.services.storage import JsonAliasFile, JsonIdListStore, RedisIdListStore
from gatekeeper.utils.exceptions import StorageError
from tests.helpers import MemoryStore


@pytest_asyncio.fixture
async def redis():
    r = fakeredis.aioredis.FakeRedis()
    await r.flushall()
    yield r
    await r.flushall()
    await r.aclose()


@pytest.mark.asyncio
async def test_json_store_roundtrip(tmp_path):
    store = JsonIdListStore(str(tmp_path / "data"))
    assert await store.load("blacklist") == set()

    await store.save("blacklist", {"2", "1"})
    with open(tmp_path / "data" / "blacklist.json", encoding="utf-8") as f:
        assert json.load(f) == ["1", "2"]
    assert await store.load("blacklist") == {"1", "2"}


@pytest.mark.asyncio
async def test_json_store_rejects_bad_files(tmp_path):
    store = JsonIdListStore(str(tmp_path))
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "object.json").write_text('{"a": 1}', encoding="utf-8")

    with pytest.raises(StorageError):
        await store.load("broken")
    with pytest.raises(StorageError):
        await store.load("object")


@pytest.mark.asyncio
async def test_redis_store_roundtrip(redis):
    store = RedisIdListStore(redis, key_prefix="test:")
    assert store.key_for("blacklist") == "test:list:blacklist"
    assert await store.load("blacklist") == set()

    await store.save("blacklist", ["1", "2"])
    assert await store.load("blacklist") == {"1", "2"}

    await store.save("blacklist", ["3"])
    assert await store.load("blacklist") == {"3"}

    await store.save("blacklist", [])
    assert await store.load("blacklist") == set()


class FailingStore:
    async def load(self, name):
        raise StorageError("boom")

    async def save(self, name, ids):
        raise StorageError("boom")


@pytest.mark.asyncio
async def test_block_lists_merge_stored_ids():
    store = MemoryStore(blacklist={"5"}, whitelist={"6"})
    lists = BlockLists(store=store, blocked_ids=["1"])
    await lists.load()
    assert lists.blacklist == {"1", "5"}
    assert lists.whitelist == {"6"}


@pytest.mark.asyncio
async def test_block_lists_survive_storage_errors():
    lists = BlockLists(store=FailingStore(), blocked_ids=["1"])
    await lists.load()
    assert lists.blacklist == {"1"}

    assert await lists.add_to_blacklist("2")
    assert lists.is_blacklisted("2")
    assert not await lists.persist()


@pytest.mark.asyncio
async def test_alias_file(tmp_path):
    path = tmp_path / "aliases.json"
    assert await JsonAliasFile(str(path)).load() == []

    path.write_text(
        json.dumps([{"alias": "p", "command": "ping"}, {"alias": "?", "command": "help"}]),
        encoding="utf-8",
    )
    assert await JsonAliasFile(str(path)).load() == [("p", "ping"), ("?", "help")]


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ['{"p": "ping"}', '[{"alias": "p"}]', "[1, 2]", "not json"])
async def test_alias_file_rejects_bad_format(tmp_path, content):
    path = tmp_path / "aliases.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StorageError):
        await JsonAliasFile(str(path)).load()
