"""Short-lived PKCE verifier storage keyed by OAuth state."""

import asyncio
import time
from typing import Protocol


class VerifierStore(Protocol):
    """Protocol for storing PKCE verifiers between authorization and callback.

    Entries are single-use: `pop` removes the entry it returns, and only one
    of several concurrent `pop` calls for the same key may receive it.
    Implementations can be backed by process memory, a shared cache or a
    database.
    """

    async def put(self, key: str, value: str, ttl_seconds: float) -> None:
        """Store value under key for at most ttl_seconds.

        Args:
            key: OAuth state parameter
            value: PKCE code verifier
            ttl_seconds: Lifetime of the entry
        """
        ...

    async def pop(self, key: str) -> str | None:
        """Atomically get and remove the value for key.

        Args:
            key: OAuth state parameter from the callback

        Returns:
            Stored value if present and not expired, None otherwise
        """
        ...


class InMemoryVerifierStore:
    """In-memory verifier store.

    Sufficient for a single process. Deployments with several instances
    need a shared backend so the callback can land on any of them.

    Attributes:
        _entries: Dict mapping state → (verifier, monotonic expiry)
    """

    def __init__(self, clock=time.monotonic) -> None:
        """Initialize empty store.

        Args:
            clock: Monotonic time source in seconds
        """
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    async def put(self, key: str, value: str, ttl_seconds: float) -> None:
        """Store the verifier, dropping entries whose callback never came."""
        async with self._lock:
            now = self._clock()
            expired = [k for k, (_, exp) in self._entries.items() if exp <= now]
            for k in expired:
                del self._entries[k]
            self._entries[key] = (value, now + ttl_seconds)

    async def pop(self, key: str) -> str | None:
        """Get and remove the verifier. Expired entries are dropped."""
        async with self._lock:
            entry = self._entries.pop(key, None)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at <= self._clock():
            return None
        return value

    def __len__(self) -> int:
        return len(self._entries)
