"""Token-bucket request scheduler shared by every Riot API call.

A single ``RequestScheduler`` is created per process and handed to each
client, so all requests draw from the same budget. Admission is strictly
FIFO; completion order is not guaranteed once ``max_concurrent`` > 1.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from ..config import Settings
from .errors import RateLimitError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class SchedulerStats:
    """Counters describing scheduler activity since start."""

    admitted: int = 0
    rate_limited: int = 0
    reservoir_waits: int = 0


class RequestScheduler:
    """Reservoir based admission control with retry on 429 responses."""

    def __init__(
        self,
        reservoir: int = 100,
        refresh_amount: int = 100,
        refresh_interval: float = 120.0,
        max_concurrent: int = 1,
        min_time: float = 0.05,
        default_retry_after: float = 1.0,
    ):
        """
        Initialize the scheduler.

        Args:
            reservoir: Tokens available before the first refresh
            refresh_amount: Value the reservoir is reset to on every refresh
            refresh_interval: Seconds between reservoir refreshes
            max_concurrent: Maximum number of operations running at once
            min_time: Minimum spacing in seconds between two admissions
            default_retry_after: Delay used when a 429 carries no Retry-After
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")

        self.refresh_amount = refresh_amount
        self.refresh_interval = refresh_interval
        self.max_concurrent = max_concurrent
        self.min_time = min_time
        self.default_retry_after = default_retry_after

        self._tokens = reservoir
        self._next_refresh = time.monotonic() + refresh_interval
        self._last_admission: Optional[float] = None

        # asyncio.Lock wakes waiters in FIFO order
        self._admission_lock = asyncio.Lock()
        self._slots = asyncio.Semaphore(max_concurrent)

        self.stats = SchedulerStats()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RequestScheduler":
        """Build a scheduler from application settings."""
        return cls(
            reservoir=settings.rate_limit_reservoir,
            refresh_amount=settings.rate_limit_refresh_amount,
            refresh_interval=settings.rate_limit_refresh_interval,
            max_concurrent=settings.rate_limit_max_concurrent,
            min_time=settings.rate_limit_min_time,
            default_retry_after=settings.rate_limit_default_retry_after,
        )

    @property
    def tokens(self) -> int:
        """Tokens left in the reservoir (after applying any due refresh)."""
        self._refresh(time.monotonic())
        return self._tokens

    async def schedule(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``operation`` once it is admitted, retrying it on rate limiting.

        Args:
            operation: Zero-argument callable performing exactly one upstream call

        Returns:
            Whatever the operation returns

        Raises:
            Any exception raised by the operation other than RateLimitError
        """
        while True:
            await self._admit()
            try:
                return await operation()
            except RateLimitError as e:
                retry_after = (
                    e.retry_after
                    if e.retry_after is not None
                    else self.default_retry_after
                )
                self.stats.rate_limited += 1
                logger.warning(
                    "Rate limit exceeded, retrying",
                    retry_after=retry_after,
                    app_rate_limit=e.app_rate_limit,
                    method_rate_limit=e.method_rate_limit,
                )
            finally:
                self._slots.release()

            await asyncio.sleep(retry_after)

    async def _admit(self) -> None:
        """Wait for a free slot, a token and the minimum spacing, in FIFO order."""
        async with self._admission_lock:
            await self._slots.acquire()
            try:
                await self._wait_for_token()
                await self._wait_for_spacing()
            except BaseException:
                self._slots.release()
                raise

            self._tokens -= 1
            self._last_admission = time.monotonic()
            self.stats.admitted += 1

    async def _wait_for_token(self) -> None:
        now = time.monotonic()
        self._refresh(now)
        while self._tokens <= 0:
            wait_time = max(self._next_refresh - now, 0.0)
            self.stats.reservoir_waits += 1
            logger.info("Request reservoir depleted, waiting", wait_time=wait_time)
            await asyncio.sleep(wait_time)
            now = time.monotonic()
            self._refresh(now)

    async def _wait_for_spacing(self) -> None:
        if self._last_admission is None or self.min_time <= 0:
            return
        remaining = self._last_admission + self.min_time - time.monotonic()
        if remaining > 0:
            await asyncio.sleep(remaining)

    def _refresh(self, now: float) -> None:
        """Reset the reservoir if one or more refresh intervals have elapsed."""
        if now < self._next_refresh:
            return
        missed = int((now - self._next_refresh) // self.refresh_interval)
        self._next_refresh += (missed + 1) * self.refresh_interval
        self._tokens = self.refresh_amount
        logger.debug(
            "Request reservoir refreshed",
            tokens=self._tokens,
            next_refresh_in=self._next_refresh - now,
        )
