# nfl_hq/cache/response_cache.py

import asyncio
import time
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from loguru import logger

from nfl_hq.config.settings import settings

T = TypeVar("T")


class ResponseCache(Generic[T]):
    """Process-lifetime, single-slot read-through cache with a fixed TTL.

    Holds the last computed value and when it was computed. Nothing is
    persisted. Reads see either the old or the new value, never a mix, since
    the value and its timestamp are swapped together on the event loop.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        single_flight: Optional[bool] = None,
        name: str = "cache",
    ):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.cache_ttl_seconds
        self.single_flight = (
            single_flight if single_flight is not None else settings.single_flight
        )
        self.name = name
        self._clock = clock
        self._value: Optional[T] = None
        self._stored_at: float = 0.0
        self._pending: Optional[asyncio.Future] = None

    def age(self) -> Optional[float]:
        if self._value is None:
            return None
        return self._clock() - self._stored_at

    def get_fresh(self) -> Optional[T]:
        """The cached value if it is younger than the TTL, else None."""
        age = self.age()
        if age is not None and age < self.ttl_seconds:
            return self._value
        return None

    def last_known(self) -> Optional[T]:
        """The cached value regardless of age."""
        return self._value

    def store(self, value: T) -> None:
        self._value = value
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._value = None
        self._stored_at = 0.0

    async def _compute_and_store(self, compute: Callable[[], Awaitable[T]]) -> T:
        value = await compute()
        self.store(value)
        return value

    async def _compute_shared(self, compute: Callable[[], Awaitable[T]]) -> T:
        if self._pending is None:
            pending = asyncio.ensure_future(self._compute_and_store(compute))

            def _clear_pending(fut: asyncio.Future) -> None:
                if self._pending is fut:
                    self._pending = None

            pending.add_done_callback(_clear_pending)
            self._pending = pending
        else:
            logger.debug(f"{self.name}: joining in-flight computation")
        return await asyncio.shield(self._pending)

    async def read_through(
        self,
        compute: Callable[[], Awaitable[T]],
        on_fallback: Optional[Callable[[T], T]] = None,
    ) -> T:
        """Returns a fresh cached value, or computes, stores and returns a new one.

        If the computation raises and any value was cached before, that value
        is returned (passed through ``on_fallback`` first). Otherwise the
        error propagates.
        """
        cached = self.get_fresh()
        if cached is not None:
            logger.debug(f"{self.name}: hit (age {self.age():.1f}s)")
            return cached

        logger.info(f"{self.name}: miss, recomputing")
        try:
            if self.single_flight:
                return await self._compute_shared(compute)
            return await self._compute_and_store(compute)
        except Exception as e:
            last = self.last_known()
            if last is None:
                logger.error(f"{self.name}: computation failed with nothing cached: {e!r}")
                raise
            logger.warning(
                f"{self.name}: computation failed, serving last known value "
                f"(age {self.age():.1f}s): {e!r}"
            )
            return on_fallback(last) if on_fallback else last
