# eventa/flows/reservation_timer.py
import asyncio
import math
import time
from enum import Enum
from typing import Callable, Optional, Tuple

from loguru import logger

from eventa.config import RESERVATION_MINUTES


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class ReservationTimer:
    """
    Countdown shown while the user completes checkout.

    Only the deadline is stored; minutes and seconds are derived from the
    clock on every tick, so a late wake-up never makes the display drift.
    This is a hint to the user, the backend owns any real seat hold.
    """

    def __init__(
        self,
        on_expire: Callable[[], None],
        duration: float = RESERVATION_MINUTES * 60,
        on_tick: Optional[Callable[[int, int], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep=asyncio.sleep,
    ):
        self.duration = duration
        self.on_expire = on_expire
        self.on_tick = on_tick
        self._clock = clock
        self._sleep = sleep
        self.deadline: Optional[float] = None
        self.state = TimerState.IDLE
        self._task: Optional[asyncio.Task] = None
        self._published: Optional[int] = None

    def seconds_left(self) -> int:
        if self.deadline is None:
            return int(math.ceil(self.duration))
        if self.state == TimerState.EXPIRED:
            return 0
        return max(0, int(math.ceil(self.deadline - self._clock())))

    def time_left(self) -> Tuple[int, int]:
        return divmod(self.seconds_left(), 60)

    def display(self) -> str:
        minutes, seconds = self.time_left()
        return f"{minutes:02d}:{seconds:02d}"

    def start(self):
        if self.state != TimerState.IDLE:
            raise RuntimeError(f"Reservation timer already {self.state.value}")

        self.deadline = self._clock() + self.duration
        self.state = TimerState.RUNNING
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug(f"Reservation timer started, {self.display()} left")

    async def _run(self):
        while self.state == TimerState.RUNNING:
            left = self.seconds_left()
            # An early wake-up sees the same value again
            if self.on_tick and left != self._published:
                self.on_tick(*divmod(left, 60))
            self._published = left
            if left <= 0:
                self._expire()
                return
            # Wake when the displayed value is due to drop by one
            await self._sleep(max(0.0, self.deadline - self._clock() - (left - 1)))

    def _expire(self):
        self.state = TimerState.EXPIRED
        logger.info("Reservation window expired")
        self.on_expire()

    def cancel(self):
        if self.state not in (TimerState.IDLE, TimerState.RUNNING):
            return
        self.state = TimerState.CANCELLED
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.debug("Reservation timer cancelled")

    async def wait(self):
        """Until the tick task has finished, whichever way it ended."""
        if self._task is not None:
            await asyncio.wait({self._task})
