"""Keep subscribed feeds refreshing and pass their new posts to a notification sink."""

import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path

from src.config.feed_enums import FetchStatus
from src.feeds.feed_resource import FeedHandle
from src.feeds.models import FeedEntry, ParsedFeed
from src.feeds.notifier import NotificationSink
from src.scheduler.fetch_scheduler import FetchScheduler
from src.scheduler.queue_entry import FetchCallback
from src.scheduler.recurrence import RecurringFetch
from src.utils.json_list import append_to_json_list
from src.utils.logger import logger

MAX_SEEN_ENTRIES = 1000


class SeenEntries:
    """
    Remember which posts of a feed have already been passed on.

    Only the most recent max_keys posts are kept; older keys are forgotten first.
    """

    def __init__(self, max_keys: int = MAX_SEEN_ENTRIES) -> None:
        self.max_keys = max_keys
        self._keys: OrderedDict[tuple[str, str], None] = OrderedDict()
        self.lock = threading.Lock()

    def __len__(self) -> int:
        with self.lock:
            return len(self._keys)

    def filter_new(self, entries: list[FeedEntry]) -> list[FeedEntry]:
        """Return the entries not seen before and mark them as seen."""
        new = []
        with self.lock:
            for entry in entries:
                if entry.key in self._keys:
                    self._keys.move_to_end(entry.key)
                    continue
                self._keys[entry.key] = None
                new.append(entry)
            while len(self._keys) > self.max_keys:
                self._keys.popitem(last=False)
        return new


def schedule_monitored_resource(
    scheduler: FetchScheduler,
    handle: FeedHandle,
    sink: NotificationSink,
    seen: SeenEntries | None = None,
) -> RecurringFetch:
    """Poll handle forever; on success send its unseen entries to sink."""
    seen = seen if seen is not None else SeenEntries()

    def on_complete(status: FetchStatus, feed: ParsedFeed | None) -> None:
        if status != FetchStatus.SUCCESS or feed is None:
            return
        new_entries = seen.filter_new(feed.entries)
        if new_entries:
            sink.notify(handle, new_entries)

    return scheduler.schedule_recurring(handle.url, on_complete)


@dataclass(eq=False)
class MonitoredFeed:
    """Subscription state for one feed."""

    handle: FeedHandle
    subscribers: set[str] = field(default_factory=set)
    waiting: set[str] = field(default_factory=set)  # subscribed before first fetch finished
    seen: SeenEntries = field(default_factory=SeenEntries)
    recurrence: RecurringFetch | None = None


class FeedMonitor:
    """
    In-memory registry of who follows which feed.

    With feed_list_file set, every feed whose first fetch succeeds is recorded in
    that JSON list so it is monitored again on the next start.
    """

    def __init__(self, scheduler: FetchScheduler, sink: NotificationSink,
                 feed_list_file: Path | None = None) -> None:
        """Initialize FeedMonitor."""
        self.scheduler = scheduler
        self.sink = sink
        self.feed_list_file = feed_list_file
        self.feeds: dict[FeedHandle, MonitoredFeed] = {}
        self.lock = threading.Lock()

    def subscribe(self, text: str, subscriber: str) -> FeedHandle:
        """
        Subscribe subscriber to the feed named by text.

        A feed nobody follows yet is fetched once with priority; its current posts
        are marked as seen so the new subscriber is not flooded, and monitoring
        starts afterwards. Failure is reported through the sink.
        """
        handle = FeedHandle.from_input(text)
        with self.lock:
            monitored = self.feeds.get(handle)
            if monitored is not None:
                if monitored.recurrence is not None:
                    monitored.subscribers.add(subscriber)
                    logger.info(f"[MONITOR]: {subscriber} subscribed to {handle.nice_resource}")
                else:
                    monitored.waiting.add(subscriber)
                return handle
            monitored = MonitoredFeed(handle, waiting={subscriber})
            self.feeds[handle] = monitored

        logger.info(f"[MONITOR]: New feed {handle.nice_resource}, fetching first")
        self.scheduler.schedule_once(handle.url, self._first_fetch(monitored), priority=True)
        return handle

    def _first_fetch(self, monitored: MonitoredFeed) -> FetchCallback:
        handle = monitored.handle

        def on_complete(status: FetchStatus, feed: ParsedFeed | None) -> None:
            if status != FetchStatus.SUCCESS or feed is None:
                with self.lock:
                    self.feeds.pop(handle, None)
                    failed = sorted(monitored.waiting)
                for subscriber in failed:
                    self.sink.subscribe_failed(handle, subscriber)
                return

            monitored.seen.filter_new(feed.entries)
            with self.lock:
                monitored.subscribers |= monitored.waiting
                monitored.waiting.clear()
                if not monitored.subscribers:
                    self.feeds.pop(handle, None)
                    return
                monitored.recurrence = schedule_monitored_resource(
                    self.scheduler, handle, self.sink, monitored.seen,
                )
            logger.info(f"[MONITOR]: Subscribed {sorted(monitored.subscribers)} "
                        f"to {handle.nice_resource}")
            if self.feed_list_file is not None:
                append_to_json_list(self.feed_list_file, handle.nice_resource)

        return on_complete

    def unsubscribe(self, text: str, subscriber: str) -> bool:
        """Remove a subscription. The last one out stops the feed's polling."""
        handle = FeedHandle.from_input(text)
        with self.lock:
            monitored = self.feeds.get(handle)
            if monitored is None:
                return False
            found = subscriber in monitored.subscribers or subscriber in monitored.waiting
            monitored.subscribers.discard(subscriber)
            monitored.waiting.discard(subscriber)
            if monitored.recurrence is not None and not monitored.subscribers:
                monitored.recurrence.cancel()
                self.feeds.pop(handle)
                logger.info(f"[MONITOR]: No subscribers left for {handle.nice_resource}")
        return found

    def subscribers(self, handle: FeedHandle) -> list[str]:
        """Subscribers currently receiving posts from handle."""
        with self.lock:
            monitored = self.feeds.get(handle)
            return sorted(monitored.subscribers) if monitored else []

    def subscriptions(self, subscriber: str) -> list[FeedHandle]:
        """Feeds subscriber follows."""
        with self.lock:
            return [
                m.handle for m in self.feeds.values()
                if subscriber in m.subscribers or subscriber in m.waiting
            ]
