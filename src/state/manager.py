"""Redis-based state manager backing every marketplace record."""

import json
from typing import Any, Callable

import redis.asyncio as redis
from redis.exceptions import WatchError

from src.config import get_settings
from src.errors import ConcurrentUpdate
from src.utils.logging import get_logger

logger = get_logger(__name__)

Mutation = Callable[[dict[str, Any]], dict[str, Any]]


class StateManager:
    """Centralized state management using Redis."""

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        settings = get_settings()
        self.redis_client: redis.Redis | None = redis_client
        self.redis_url = settings.redis_url
        self.prefix = settings.redis_key_prefix
        self.max_retries = settings.max_transaction_retries

    async def connect(self) -> None:
        """Establish Redis connection."""
        if self.redis_client is None:
            self.redis_client = await redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            logger.info("redis_connected", url=self.redis_url)

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
            logger.info("redis_disconnected")

    async def ping(self) -> bool:
        """Check the connection is alive."""
        if not self.redis_client:
            await self.connect()

        return bool(await self.redis_client.ping())

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    @staticmethod
    def _encode(value: Any) -> Any:
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return value

    @staticmethod
    def _decode(value: Any) -> Any:
        if value is None:
            return None
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value

    async def set(self, key: str, value: Any) -> None:
        """Set a value in Redis."""
        if not self.redis_client:
            await self.connect()

        await self.redis_client.set(self._key(key), self._encode(value))
        logger.debug("state_set", key=key)

    async def get(self, key: str) -> Any:
        """Get a value from Redis."""
        if not self.redis_client:
            await self.connect()

        return self._decode(await self.redis_client.get(self._key(key)))

    async def mget(self, keys: list[str]) -> list[Any]:
        """Get several values in one round trip, None for missing keys."""
        if not keys:
            return []

        if not self.redis_client:
            await self.connect()

        values = await self.redis_client.mget([self._key(key) for key in keys])
        return [self._decode(value) for value in values]

    async def delete(self, key: str) -> None:
        """Delete a key from Redis."""
        if not self.redis_client:
            await self.connect()

        await self.redis_client.delete(self._key(key))
        logger.debug("state_deleted", key=key)

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        if not self.redis_client:
            await self.connect()

        return bool(await self.redis_client.exists(self._key(key)))

    async def zadd(self, key: str, mapping: dict[str, float]) -> None:
        """Add members to a sorted set."""
        if not self.redis_client:
            await self.connect()

        await self.redis_client.zadd(self._key(key), mapping)

    async def zrange(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        """Get members from a sorted set, lowest score first."""
        if not self.redis_client:
            await self.connect()

        return await self.redis_client.zrange(self._key(key), start, end)

    async def zrem(self, key: str, *members: str) -> None:
        """Remove members from a sorted set."""
        if not self.redis_client:
            await self.connect()

        await self.redis_client.zrem(self._key(key), *members)

    async def atomic_update(self, keys: list[str], mutate: Mutation) -> dict[str, Any]:
        """
        Read-modify-write several keys as one optimistic transaction.

        The keys are WATCHed and read, ``mutate`` receives their decoded
        values (None for missing keys) and returns the values to write.
        Any exception raised by ``mutate`` aborts the transaction without
        writing. When another client changes a watched key before EXEC the
        whole cycle is retried.

        Args:
            keys: Unprefixed keys to watch and read
            mutate: Function from current values to values to write

        Returns:
            The values written

        Raises:
            ConcurrentUpdate: If every retry lost the race
        """
        if not self.redis_client:
            await self.connect()

        full_keys = [self._key(key) for key in keys]

        async with self.redis_client.pipeline(transaction=True) as pipe:
            for attempt in range(1, self.max_retries + 1):
                try:
                    await pipe.watch(*full_keys)
                    raw = await pipe.mget(full_keys)
                    current = {key: self._decode(value) for key, value in zip(keys, raw)}

                    updates = mutate(current)

                    pipe.multi()
                    for key, value in updates.items():
                        pipe.set(self._key(key), self._encode(value))
                    await pipe.execute()
                    return updates
                except WatchError:
                    logger.debug("transaction_conflict", keys=keys, attempt=attempt)

        logger.warning("transaction_retries_exhausted", keys=keys)
        raise ConcurrentUpdate("Record was modified concurrently, please retry", keys=keys)

    async def delete_namespace(self) -> int:
        """Delete every key under this manager's prefix."""
        if not self.redis_client:
            await self.connect()

        deleted = 0
        async for key in self.redis_client.scan_iter(match=f"{self.prefix}:*"):
            deleted += await self.redis_client.delete(key)

        logger.info("namespace_cleared", prefix=self.prefix, deleted=deleted)
        return deleted


# Global state manager instance
_state_manager: StateManager | None = None


async def get_state_manager() -> StateManager:
    """Get the global state manager instance."""
    global _state_manager
    if _state_manager is None:
        _state_manager = StateManager()
        await _state_manager.connect()
    return _state_manager
