"""Notification sinks that receive new feed entries."""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from src.feeds.feed_resource import FeedHandle
from src.feeds.models import FeedEntry
from src.utils.logger import logger

DEFAULT_MARKUP = (
    "<b>{title}</b>\n"
    "Published at: {date}\n"
    "In feed {feed}\n"
    '<a href="{url}">View post</a>'
)


class NotificationSink(Protocol):
    """Receiver of feed updates. Delivery to subscribers is up to the sink."""

    def notify(self, handle: FeedHandle, entries: list[FeedEntry]) -> None: ...

    def subscribe_failed(self, handle: FeedHandle, subscriber: str) -> None: ...


def format_published(published: datetime | None) -> str:
    """Format like 'Sat 3 Mar 2018 at 9:05'."""
    published = published or datetime.now()
    return (f"{published:%a} {published.day} {published:%b} {published.year} "
            f"at {published.hour}:{published.minute:02d}")


def render_entry(entry: FeedEntry, handle: FeedHandle, markup: str = DEFAULT_MARKUP) -> str:
    """Fill in a markup template for one entry."""
    categories = ", ".join(
        c if " " in c else f"#{c}" for c in entry.categories
    )
    return (
        markup.replace("\\n", "\n")
        .replace("{title}", entry.title)
        .replace("{url}", entry.link)
        .replace("{date}", format_published(entry.published))
        .replace("{feed}", handle.nice_resource)
        .replace("{author}", entry.author or f"someone at {handle.nice_resource}")
        .replace("{categories}", categories)
        .replace("{pic}", entry.picture_url or "")
    )


class LoggingNotificationSink:
    """Sink that writes every new entry to the log, once per subscriber."""

    def __init__(self, subscribers_of: Callable[[FeedHandle], list[str]] | None = None,
                 markup: str = DEFAULT_MARKUP) -> None:
        self.subscribers_of = subscribers_of
        self.markup = markup

    def notify(self, handle: FeedHandle, entries: list[FeedEntry]) -> None:
        subscribers = self.subscribers_of(handle) if self.subscribers_of else ["log"]
        logger.info(f"[NOTIFIER]: {len(entries)} new post(s) in {handle.nice_resource}")
        for entry in entries:
            text = render_entry(entry, handle, self.markup)
            for subscriber in subscribers:
                logger.info(f"[NOTIFIER]: -> {subscriber}\n{text}")

    def subscribe_failed(self, handle: FeedHandle, subscriber: str) -> None:
        logger.warning(f"[NOTIFIER]: -> {subscriber}: Could not subscribe to {handle.nice_resource}.")
