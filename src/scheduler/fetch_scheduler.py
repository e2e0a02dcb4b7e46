"""Scheduler for the fetch loop: one entry per tick, gated by a per-host rate limiter."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from queue import Empty, PriorityQueue
from typing import Any

from src.config.feed_enums import FetchStatus
from src.config.settings import MIN_HOST_INTERVAL, REFRESH_COOLDOWN, TICK_INTERVAL
from src.feeds.models import ParsedFeed
from src.scheduler.fetch_queue import FetchQueue
from src.scheduler.queue_entry import FetchCallback, QueueEntry
from src.scheduler.rate_limiter import HostRateLimiter
from src.scheduler.recurrence import RecurringFetch
from src.utils.custom_exceptions.fetch_exceptions import FetchError
from src.utils.logger import logger
from src.utils.strings.get_host import host_of as default_host_of
from src.workers.tick_worker import TickWorker


@dataclass(order=True)
class DelayedItem:
    """Item waiting out its refresh cooldown."""

    next_time: float
    item: Any = field(compare=False)


class FetchScheduler:
    """
    Fetch feeds one at a time, never hitting a host more often than allowed.

    The ticker thread is the only executor of dequeue, rate-limit check, fetch and
    callback. Callbacks run synchronously on that thread, so a slow callback stalls
    every other feed; callbacks should be quick or hand their work off.
    """

    def __init__(
        self,
        fetch: Callable[[str], ParsedFeed],
        *,
        host_of: Callable[[str], str] = default_host_of,
        tick_interval: float = TICK_INTERVAL,
        min_host_interval: float = MIN_HOST_INTERVAL,
        refresh_cooldown: float = REFRESH_COOLDOWN,
        clock: Callable[[], float] = time.monotonic,
        launch_ticker: bool = True,
        name: str = "Fetch Scheduler",
    ) -> None:
        """Initialize FetchScheduler. With launch_ticker=False, callers drive tick()."""
        self.fetch = fetch
        self.host_of = host_of
        self.tick_interval = tick_interval
        self.refresh_cooldown = refresh_cooldown
        self.clock = clock
        self.launch_ticker = launch_ticker
        self.name = name

        self.queue = FetchQueue()
        self.rate_limiter = HostRateLimiter(min_host_interval, clock=clock)
        # Recurring entries cooling down (min-heap by next_time).
        self.delayed: PriorityQueue = PriorityQueue()

        self.running = False
        self.in_flight: QueueEntry | None = None
        self.ticker: TickWorker | None = None
        self.lock = threading.Lock()

    # ------ run state -------
    def start(self) -> None:
        """Switch to RUNNING, launching the ticker on first use."""
        with self.lock:
            self.running = True
            if self.launch_ticker and (self.ticker is None or not self.ticker.is_alive()):
                self.ticker = TickWorker(self.tick, self.tick_interval, name=self.name)
                self.ticker.start()
        logger.info(f"[{self.name.upper()}]: Started with {len(self.queue)} queued")

    def stop(self) -> None:
        """Switch to STOPPED. The ticker keeps running but does nothing."""
        with self.lock:
            self.running = False
        logger.info(f"[{self.name.upper()}]: Stopped with {len(self.queue)} queued")

    def shutdown(self, timeout: float = 5.0) -> None:
        """Stop and end the ticker thread."""
        self.stop()
        with self.lock:
            ticker, self.ticker = self.ticker, None
        if ticker is not None:
            ticker.stop()
            ticker.join(timeout=timeout)
            if ticker.is_alive():
                logger.warning(f"THREAD {ticker.name} FAILED SHUTDOWN")

    # ------ scheduling -------
    def schedule_once(self, identifier: str, on_complete: FetchCallback, *,
                      priority: bool = False) -> QueueEntry:
        """Queue a single fetch; priority entries go to the front."""
        entry = QueueEntry(identifier, on_complete, priority=priority)
        self._enqueue(entry)
        return entry

    def schedule_recurring(self, identifier: str, on_complete: FetchCallback, *,
                           cooldown: float | None = None) -> RecurringFetch:
        """Poll identifier indefinitely, cooling down after each completed fetch."""
        recurrence = RecurringFetch(
            identifier, on_complete,
            cooldown=self.refresh_cooldown if cooldown is None else cooldown,
        )
        entry = recurrence.next_entry()
        self._enqueue(entry)
        logger.info(f"[{self.name.upper()}]: Monitoring {identifier}")
        return recurrence

    def schedule_after(self, entry: QueueEntry, delay: float) -> None:
        """Hold entry back for delay seconds, then append it to the queue."""
        self.delayed.put(DelayedItem(self.clock() + delay, entry))

    def _enqueue(self, entry: QueueEntry) -> None:
        if entry.priority:
            self.queue.push_front(entry)
        else:
            self.queue.push_back(entry)

    # ------ loop -------
    def tick(self) -> bool:
        """Run one step of the loop. Return True if a fetch was executed."""
        if not self.running:
            return False
        self._promote_due()

        entry = self.queue.pop_front()
        if entry is None:
            return False
        if entry.cancelled:
            logger.info(f"[{self.name.upper()}]: Dropping cancelled entry for {entry.identifier}")
            return False

        host = self.host_of(entry.identifier)
        if not self.rate_limiter.can_attempt(host):
            logger.debug(
                f"[{self.name.upper()}]: {entry.identifier} has to wait "
                f"{self.rate_limiter.time_until_allowed(host):.1f}s, moving it up by one",
            )
            self.queue.move_forward_one(entry)
            return False

        self.rate_limiter.record_attempt(host)
        self.in_flight = entry
        try:
            status, feed = self._execute(entry)
            self._complete(entry, status, feed)
        finally:
            self.in_flight = None
        self._resubmit(entry)
        return True

    def _execute(self, entry: QueueEntry) -> tuple[FetchStatus, ParsedFeed | None]:
        logger.debug(f"[{self.name.upper()}]: Starting {entry.identifier}")
        try:
            feed = self.fetch(entry.identifier)
        except FetchError as e:
            kind = e.kind.value if e.kind else "FETCH"
            logger.warning(f"[{self.name.upper()}]: {kind} error for {entry.identifier}: {e}")
            return FetchStatus.ERROR, None
        except Exception as e:  # noqa: BLE001
            logger.exception(f"[{self.name.upper()}]: Unexpected error for {entry.identifier}: {e}")
            return FetchStatus.ERROR, None
        return FetchStatus.SUCCESS, feed

    def _complete(self, entry: QueueEntry, status: FetchStatus, feed: ParsedFeed | None) -> None:
        try:
            entry.on_complete(status, feed)
        except Exception as e:  # noqa: BLE001
            logger.exception(f"[{self.name.upper()}]: Callback failed for {entry.identifier}: {e}")
        logger.debug(f"[{self.name.upper()}]: Finished callback for {entry.identifier} ({status.value})")

    def _resubmit(self, entry: QueueEntry) -> None:
        if entry.recurrence is None:
            return
        next_entry = entry.recurrence.next_entry()
        if next_entry is None:
            logger.info(f"[{self.name.upper()}]: Stopped monitoring {entry.identifier}")
            return
        logger.debug(
            f"[{self.name.upper()}]: Refreshing {entry.identifier} in "
            f"{entry.recurrence.cooldown}s (cycle {entry.recurrence.cycles})",
        )
        self.schedule_after(next_entry, entry.recurrence.cooldown)

    def _promote_due(self) -> None:
        """Move every delayed entry whose cooldown has passed to the back of the queue."""
        now = self.clock()
        while True:
            try:
                peek = self.delayed.get_nowait()
            except Empty:
                return
            if peek.next_time > now:
                self.delayed.put(peek)
                return
            if peek.item.cancelled:
                logger.info(f"[{self.name.upper()}]: Stopped monitoring {peek.item.identifier}")
                continue
            self.queue.push_back(peek.item)

    # ------ introspection -------
    def time_until_next(self) -> float | None:
        """Return seconds until the next delayed entry is due, or None if none."""
        with self.delayed.mutex:
            if not self.delayed.queue:
                return None
            next_time = self.delayed.queue[0].next_time
        return max(0.0, next_time - self.clock())

    def pending_count(self, identifier: str) -> int:
        """Count queued, cooling-down and in-flight entries for identifier."""
        with self.delayed.mutex:
            delayed = sum(
                1 for d in self.delayed.queue
                if d.item.identifier == identifier and not d.item.cancelled
            )
        queued = sum(
            1 for e in self.queue.snapshot()
            if e.identifier == identifier and not e.cancelled
        )
        in_flight = self.in_flight
        busy = 1 if in_flight is not None and in_flight.identifier == identifier else 0
        return queued + delayed + busy
