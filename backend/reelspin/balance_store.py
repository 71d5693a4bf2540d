"""Balance persistence: a single integer that must survive a restart."""
import logging
from typing import Protocol

import redis

from reelspin.config import settings


logger = logging.getLogger(__name__)


class BalanceStore(Protocol):
    """Key-value store holding the player's balance."""

    def load_balance(self) -> int | None:
        """Return the stored balance, or None if nothing was saved yet."""
        ...

    def save_balance(self, balance: int) -> None:
        """Persist balance immediately."""
        ...


class InMemoryBalanceStore:
    """Process-local store, used when Redis is disabled and in tests."""

    def __init__(self, balance: int | None = None):
        self._balance = balance

    def load_balance(self) -> int | None:
        return self._balance

    def save_balance(self, balance: int) -> None:
        self._balance = balance


class RedisBalanceStore:
    """Redis-backed balance store."""

    def __init__(self, redis_url: str | None = None, key: str | None = None):
        self._url = redis_url or settings.redis_url
        self._key = key or settings.balance_key
        self._client: redis.Redis | None = None

    def connect(self) -> None:
        """Connect to Redis."""
        if self._client is None:
            self._client = redis.Redis.from_url(self._url, decode_responses=True)

    def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            self._client.close()
            self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get Redis client, raise if not connected."""
        if self._client is None:
            raise RuntimeError("Redis not connected")
        return self._client

    def load_balance(self) -> int | None:
        """
        Load balance from Redis.

        Returns None if the key is absent. A value that does not parse as an
        integer is treated as absent and logged.
        """
        raw = self.client.get(self._key)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring unparsable stored balance %r", raw)
            return None

    def save_balance(self, balance: int) -> None:
        """Save balance without TTL; the balance never expires."""
        self.client.set(self._key, str(balance))
