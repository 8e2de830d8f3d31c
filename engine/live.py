"""
Live Series Feed

Keeps simulated series in memory and advances each one on its own
cadence (SimulationConfig.update_frequency_ms) to mimic live telemetry.

- SeriesStore: lock-guarded in-memory map of series by id
- LiveSeriesFeed: asyncio task that periodically advances due series

Nothing is persisted: the store lives and dies with the process.
"""

import asyncio
import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from core.errors import SeriesNotFoundError
from .series import SeriesSimulator, SimulatedTimeSeries

logger = logging.getLogger(__name__)


class SeriesStore:
    """
    In-memory series store.

    Series values are immutable, so readers get a consistent snapshot;
    the lock only guards the mapping itself.
    """

    def __init__(self):
        self._series: Dict[str, SimulatedTimeSeries] = {}
        self._lock = threading.RLock()

    def add(self, series: SimulatedTimeSeries) -> SimulatedTimeSeries:
        with self._lock:
            self._series[series.id] = series
        return series

    def get(self, series_id: str) -> SimulatedTimeSeries:
        """
        Get a series by id.

        Raises:
            SeriesNotFoundError: If no series has this id
        """
        with self._lock:
            try:
                return self._series[series_id]
            except KeyError:
                raise SeriesNotFoundError(series_id) from None

    def replace(self, series: SimulatedTimeSeries) -> SimulatedTimeSeries:
        """Store a newer state of an existing series."""
        with self._lock:
            if series.id not in self._series:
                raise SeriesNotFoundError(series.id)
            self._series[series.id] = series
        return series

    def remove(self, series_id: str) -> SimulatedTimeSeries:
        with self._lock:
            try:
                return self._series.pop(series_id)
            except KeyError:
                raise SeriesNotFoundError(series_id) from None

    def list(self) -> List[SimulatedTimeSeries]:
        with self._lock:
            return list(self._series.values())

    def clear(self) -> None:
        with self._lock:
            self._series.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._series)

    def __contains__(self, series_id: object) -> bool:
        with self._lock:
            return series_id in self._series


class LiveSeriesFeed:
    """
    Periodically advances every stored series.

    Each series is advanced once its own update_frequency_ms has elapsed
    since its last advance. A series seen for the first time is only
    scheduled, so a freshly created series keeps its initial window for
    one full interval.

    Example:
        feed = LiveSeriesFeed(store, SeriesSimulator())
        feed.start()       # inside a running event loop
        ...
        await feed.stop()
    """

    def __init__(
        self,
        store: SeriesStore,
        simulator: Optional[SeriesSimulator] = None,
        poll_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the feed.

        Args:
            store: Store holding the series to advance
            simulator: Simulator used for advancing (fresh one if None)
            poll_interval: Seconds between checks for due series
            clock: Monotonic clock in seconds
        """
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

        self.store = store
        self.simulator = simulator or SeriesSimulator()
        self.poll_interval = poll_interval
        self.clock = clock

        self._last_advanced: Dict[str, float] = {}
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> List[SimulatedTimeSeries]:
        """
        Advance every series that is due.

        Returns:
            The advanced series states
        """
        now = self.clock()
        advanced = []
        live_ids = set()

        for series in self.store.list():
            live_ids.add(series.id)
            last = self._last_advanced.get(series.id)
            if last is None:
                self._last_advanced[series.id] = now
                continue

            interval = series.config.update_frequency_ms / 1000.0
            if now - last < interval:
                continue

            try:
                updated = self.store.replace(self.simulator.advance_series(series))
            except SeriesNotFoundError:
                # Removed between list() and replace()
                continue

            self._last_advanced[series.id] = now
            advanced.append(updated)

        # Forget series that were removed from the store
        for series_id in set(self._last_advanced) - live_ids:
            del self._last_advanced[series_id]

        if advanced:
            logger.debug(f"Advanced {len(advanced)} live series")
        return advanced

    async def run(self) -> None:
        """Tick until cancelled."""
        logger.info(f"Live feed started (poll interval {self.poll_interval}s)")
        try:
            while True:
                self.tick()
                await asyncio.sleep(self.poll_interval)
        finally:
            logger.info("Live feed stopped")

    def start(self) -> asyncio.Task:
        """Start the feed as a task on the running event loop."""
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Cancel the feed task and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
