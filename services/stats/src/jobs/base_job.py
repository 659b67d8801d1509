import asyncio
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Awaitable, Callable, Optional

from src.core.logger import get_logger


def local_now() -> datetime:
    return datetime.now().astimezone()


class PeriodicJob(ABC):
    """Self-rescheduling background job on the event loop.

    Each cycle computes an explicit ``next_fire_time`` from the wall clock,
    sleeps until then, runs once and re-arms. A failing run is logged and
    the schedule continues. ``stop()`` cancels the pending sleep.
    """

    def __init__(
        self,
        name: str,
        clock: Callable[[], datetime] = local_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.name = name
        self.logger = get_logger(name)
        self.next_fire_time: Optional[datetime] = None
        self._clock = clock
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @abstractmethod
    def compute_next_fire_time(self, after: datetime) -> datetime:
        """Return the first fire time strictly after ``after``."""

    @abstractmethod
    async def run_once(self) -> None:
        """Do one unit of work."""

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self.name)
        self.logger.info("job_started", extra={"job": self.name})

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:  # expected during shutdown
            self.logger.debug("job_cancelled", extra={"job": self.name})
        finally:
            self._task = None
            self.next_fire_time = None
        self.logger.info("job_stopped", extra={"job": self.name})

    async def _loop(self) -> None:
        while True:
            now = self._clock()
            # Never re-fire the boundary we just ran for if the sleep woke early
            after = now
            if self.next_fire_time is not None and after < self.next_fire_time:
                after = self.next_fire_time
            self.next_fire_time = self.compute_next_fire_time(after)
            delay = (self.next_fire_time - now).total_seconds()
            await self._sleep(max(delay, 0.0))
            try:
                await self.run_once()
            except Exception:
                self.logger.exception("job_run_failed", extra={"job": self.name})
