"""Key-value store backends for pantry persistence."""

from abc import ABC, abstractmethod

import redis.asyncio as redis

from pantrykit.config import Settings
from pantrykit.logging_config import get_logger

logger = get_logger(__name__)


class PantryStorageError(Exception):
    """Base exception for pantry storage errors."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class StorageWriteError(PantryStorageError):
    """Raised when the pantry list could not be written."""


class KeyValueStore(ABC):
    """Abstract durable store holding raw bytes under string keys."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend name for logging and identification."""
        pass

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """
        Read the value stored under a key.

        Args:
            key: The storage key.

        Returns:
            Stored bytes, or None if the key is missing.
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: bytes) -> None:
        """
        Replace the value stored under a key.

        Args:
            key: The storage key.
            value: Bytes to store.
        """
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for development and tests."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._values: dict[str, bytes] = dict(initial or {})

    @property
    def name(self) -> str:
        return "memory"

    async def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self._values[key] = value


class RedisKeyValueStore(KeyValueStore):
    """Store backed by a Redis server through ``redis.asyncio``."""

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        """Create a store with a client connected lazily to ``url``."""
        return cls(redis.from_url(url))

    @property
    def name(self) -> str:
        return "redis"

    async def get(self, key: str) -> bytes | None:
        return await self.client.get(key)

    async def set(self, key: str, value: bytes) -> None:
        await self.client.set(key, value)

    async def close(self) -> None:
        """Release the underlying connection pool."""
        await self.client.aclose()


def create_store(settings: Settings) -> KeyValueStore:
    """
    Build the store selected by ``settings.storage_backend``.

    Raises:
        ValueError: If the backend name is not recognised.
    """
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "redis":
        logger.info("Using Redis pantry store")
        return RedisKeyValueStore.from_url(settings.redis_url)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
