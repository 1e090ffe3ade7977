"""Tests for key-value store backends."""

from unittest.mock import AsyncMock, patch

import pytest

from pantrykit.config import Settings
from pantrykit.pantry.store import (
    InMemoryKeyValueStore,
    PantryStorageError,
    RedisKeyValueStore,
    StorageWriteError,
    create_store,
)


class TestInMemoryKeyValueStore:
    """Tests for the process-local store."""

    @pytest.mark.asyncio
    async def test_get_missing(self):
        """Test reading a missing key."""
        store = InMemoryKeyValueStore()
        assert await store.get("pantryItems") is None

    @pytest.mark.asyncio
    async def test_set_replaces(self):
        """Test writes replace the previous value."""
        store = InMemoryKeyValueStore()
        await store.set("pantryItems", b"[1]")
        await store.set("pantryItems", b"[2]")
        assert await store.get("pantryItems") == b"[2]"

    @pytest.mark.asyncio
    async def test_initial_values_are_copied(self):
        """Test the seed mapping is not shared with the store."""
        seed = {"pantryItems": b"[]"}
        store = InMemoryKeyValueStore(seed)
        await store.set("pantryItems", b"[1]")
        assert seed["pantryItems"] == b"[]"


class TestRedisKeyValueStore:
    """Tests for the Redis store with a mocked client."""

    @pytest.fixture
    def mock_client(self):
        client = AsyncMock()
        client.get.return_value = b"[]"
        return client

    @pytest.mark.asyncio
    async def test_get(self, mock_client):
        """Test reads are delegated to the client."""
        store = RedisKeyValueStore(mock_client)

        assert await store.get("pantryItems") == b"[]"
        mock_client.get.assert_awaited_once_with("pantryItems")

    @pytest.mark.asyncio
    async def test_set(self, mock_client):
        """Test writes are delegated to the client."""
        store = RedisKeyValueStore(mock_client)

        await store.set("pantryItems", b"[1]")
        mock_client.set.assert_awaited_once_with("pantryItems", b"[1]")

    @pytest.mark.asyncio
    async def test_close(self, mock_client):
        """Test closing releases the client."""
        store = RedisKeyValueStore(mock_client)

        await store.close()
        mock_client.aclose.assert_awaited_once()

    def test_name(self, mock_client):
        """Test backend name."""
        assert RedisKeyValueStore(mock_client).name == "redis"


class TestCreateStore:
    """Tests for backend selection from settings."""

    def test_memory_backend(self):
        """Test the default backend is in-memory."""
        store = create_store(Settings(storage_backend="memory"))
        assert isinstance(store, InMemoryKeyValueStore)

    def test_redis_backend(self):
        """Test the redis backend is built from the configured URL."""
        settings = Settings(storage_backend="Redis", redis_url="redis://cache:6379/2")
        with patch("pantrykit.pantry.store.redis.from_url") as from_url:
            store = create_store(settings)

        assert isinstance(store, RedisKeyValueStore)
        from_url.assert_called_once_with("redis://cache:6379/2")

    def test_unknown_backend(self):
        """Test an unknown backend name is rejected."""
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_store(Settings(storage_backend="sqlite"))


class TestStorageErrors:
    """Tests for storage exception types."""

    def test_write_error_hierarchy(self):
        """Test write errors are storage errors carrying the key."""
        error = StorageWriteError("boom", key="pantryItems")
        assert isinstance(error, PantryStorageError)
        assert error.key == "pantryItems"
        assert str(error) == "boom"
