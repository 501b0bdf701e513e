"""Poll timer driven by the refresh interval and store changes."""

import asyncio
import logging
import math
from typing import Any, Optional, Set

from ..config import DEFAULT_REFRESH_INTERVAL_MIN
from ..errors import SchedulingError
from ..store import KeyValueStore, keys
from .poller import FeedPoller

logger = logging.getLogger(__name__)


class FeedScheduler:
    """Own the poll timer.

    ``start`` polls once, arms a repeating timer at the stored refresh
    interval and subscribes to configuration changes. A selection change
    polls immediately without touching the timer; an interval change
    replaces the timer without polling. Cycles already in flight are never
    cancelled by a reschedule.
    """

    def __init__(
        self,
        store: KeyValueStore,
        poller: FeedPoller,
        default_interval_min: float = DEFAULT_REFRESH_INTERVAL_MIN,
        seconds_per_minute: float = 60.0,
    ) -> None:
        """
        Initialize scheduler.

        Args:
            store: Store holding the feed selection and refresh interval
            poller: Poller running the cycles
            default_interval_min: Interval used when none is stored or the
                stored one cannot be armed
            seconds_per_minute: Length of one interval unit in seconds
        """
        self.store = store
        self.poller = poller
        self.default_interval_min = default_interval_min
        self.seconds_per_minute = seconds_per_minute
        self.interval_min: Optional[float] = None
        self._timer: Optional[asyncio.Task] = None
        self._cycles: Set[asyncio.Task] = set()

    @property
    def is_armed(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def start(self) -> None:
        """Poll immediately, arm the timer and subscribe to configuration changes."""
        await self.poller.trigger()
        self.reschedule(await self._stored_interval())

        self.store.subscribe(keys.SELECTED_FEEDS, self.on_selection_changed)
        self.store.subscribe(keys.REFRESH_INTERVAL_MIN, self.on_interval_changed)
        logger.info("Subscribed to storage changes for selectedFeeds and refreshIntervalMin")

    async def stop(self) -> None:
        """Cancel the timer, unsubscribe and wait for in-flight cycles."""
        self.store.unsubscribe(keys.SELECTED_FEEDS)
        self.store.unsubscribe(keys.REFRESH_INTERVAL_MIN)
        await self._cancel_timer()
        if self._cycles:
            await asyncio.gather(*list(self._cycles), return_exceptions=True)

    async def on_selection_changed(self, selected: Any) -> None:
        logger.info("Selected feeds changed, triggering immediate poll...")
        await self.poller.trigger()

    async def on_interval_changed(self, interval_min: Any) -> None:
        logger.info("Refresh interval changed to %s minutes, updating schedule...", interval_min)
        self.reschedule(interval_min)

    def reschedule(self, interval_min: Any) -> float:
        """
        Replace the timer with one firing every ``interval_min`` minutes.

        An interval that cannot be armed is logged and the default interval
        is armed instead.

        Returns:
            The interval actually armed, in minutes
        """
        self._drop_timer()
        try:
            period = self._validate_interval(interval_min)
            self._arm(period)
        except Exception:
            logger.error(
                "Error scheduling feed poll with interval %r, retrying with %g minutes",
                interval_min,
                self.default_interval_min,
                exc_info=True,
            )
            self._drop_timer()
            period = self.default_interval_min
            self._arm(period)

        logger.info("Feed polling scheduled every %g minutes", period)
        return period

    async def _stored_interval(self) -> Any:
        try:
            return await self.store.get(keys.REFRESH_INTERVAL_MIN, self.default_interval_min)
        except Exception:
            logger.error("Failed to read refresh interval, using default", exc_info=True)
            return self.default_interval_min

    def _validate_interval(self, interval_min: Any) -> float:
        if isinstance(interval_min, bool):
            raise SchedulingError(f"Invalid refresh interval: {interval_min!r}")
        try:
            period = float(interval_min)
        except (TypeError, ValueError):
            raise SchedulingError(f"Invalid refresh interval: {interval_min!r}")
        if not math.isfinite(period) or period <= 0:
            raise SchedulingError(f"Refresh interval must be positive: {interval_min!r}")
        return period

    def _arm(self, interval_min: float) -> None:
        self._timer = asyncio.get_running_loop().create_task(self._run_timer(interval_min))
        self.interval_min = interval_min

    def _drop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _cancel_timer(self) -> None:
        timer = self._timer
        self._drop_timer()
        if timer is not None:
            await asyncio.gather(timer, return_exceptions=True)

    async def _run_timer(self, interval_min: float) -> None:
        while True:
            await asyncio.sleep(interval_min * self.seconds_per_minute)
            self._spawn_cycle()

    def _spawn_cycle(self) -> None:
        task = asyncio.get_running_loop().create_task(self.poller.trigger())
        self._cycles.add(task)
        task.add_done_callback(self._cycles.discard)
