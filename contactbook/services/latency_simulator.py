"""
Artificial network latency with per-key memoization.

The first operation under a given key waits a random delay bounded by
``max_delay_ms``; repeats of the same key resolve immediately until the
simulator is reset. Mutations call ``reset()`` so a later read is not masked
by a stale memoized key.

Usage:
    latency = LatencySimulator(max_delay_ms=800)
    await latency.delay("contact:abc")  # waits
    await latency.delay("contact:abc")  # instant
    latency.reset()
"""

import asyncio
import random
from collections.abc import Awaitable, Callable

from contactbook.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class LatencySimulator:
    """Injectable latency emulator; one instance per app or test session."""

    def __init__(
        self,
        max_delay_ms: int = 800,
        enabled: bool = True,
        rng: Callable[[], float] = random.random,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.max_delay_ms = max(0, max_delay_ms)
        self.enabled = enabled
        self._rng = rng
        self._sleep = sleep
        self._seen: set[str] = set()

    async def delay(self, key: str | None = None) -> None:
        """
        Wait unless ``key`` was already seen. A ``None`` key always waits and
        is never remembered.
        """
        if not self.enabled:
            return

        if key is not None:
            if key in self._seen:
                return
            self._seen.add(key)

        seconds = self._rng() * self.max_delay_ms / 1000
        logger.debug("Simulating latency", key=key, delay_ms=round(seconds * 1000, 1))
        await self._sleep(seconds)

    def seen(self, key: str) -> bool:
        return key in self._seen

    def reset(self) -> None:
        """Forget every memoized key."""
        self._seen.clear()

    @classmethod
    def disabled(cls) -> "LatencySimulator":
        return cls(max_delay_ms=0, enabled=False)
