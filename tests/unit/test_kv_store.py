import pytest

from contactbook.config import Settings
from contactbook.services.kv_store import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    build_key_value_store,
)
from contactbook.services.redis_client import FastRedisClient


@pytest.mark.asyncio
async def test_memory_store_round_trip():
    store = MemoryKeyValueStore()

    assert await store.get("contacts") is None
    assert await store.set_with_ttl("contacts", "[]") is True
    assert await store.get("contacts") == "[]"
    assert await store.delete("contacts") is True
    assert await store.delete("contacts") is False


@pytest.mark.asyncio
async def test_file_store_persists_across_instances(tmp_path):
    await FileKeyValueStore(tmp_path).set_with_ttl("contacts", '[{"id": "a"}]')

    reopened = FileKeyValueStore(tmp_path)

    assert await reopened.get("contacts") == '[{"id": "a"}]'
    assert (tmp_path / "contacts.json").exists()


@pytest.mark.asyncio
async def test_file_store_missing_key_and_delete(tmp_path):
    store = FileKeyValueStore(tmp_path / "nested")

    assert await store.get("contacts") is None
    assert await store.delete("contacts") is False
    assert await store.ping() is True


@pytest.mark.asyncio
async def test_file_store_sanitizes_key(tmp_path):
    store = FileKeyValueStore(tmp_path)
    await store.set_with_ttl("../escape", "x")

    assert not (tmp_path.parent / "escape.json").exists()
    assert await store.get("../escape") == "x"


def test_backend_selection(tmp_path):
    assert isinstance(
        build_key_value_store(Settings(STORAGE_BACKEND="memory")), MemoryKeyValueStore
    )
    assert isinstance(
        build_key_value_store(Settings(STORAGE_BACKEND="file", STORAGE_DIR=str(tmp_path))),
        FileKeyValueStore,
    )
    assert isinstance(build_key_value_store(Settings(STORAGE_BACKEND="redis")), FastRedisClient)


def test_latency_config_disabled_in_production():
    config = Settings(
        environment="production", SIMULATE_LATENCY=True, SIMULATED_LATENCY_MAX_MS=300
    ).get_latency_config()

    assert config == {"enabled": False, "max_delay_ms": 300}
