"""Main.py: Main module."""

import time

from src.config.settings import feed_list_file, project_config
from src.feeds.feed_fetcher import FeedFetcher
from src.feeds.feed_monitor import FeedMonitor
from src.feeds.notifier import LoggingNotificationSink
from src.scheduler.fetch_scheduler import FetchScheduler
from src.utils.json_list import load_json_list
from src.utils.logger import logger

CONSOLE_SUBSCRIBER = "console"
config = project_config


def main() -> None:
    """
    Run the feed scheduler as preconfigured.

    Feeds listed in the feed list file are subscribed for a local console
    subscriber and refreshed until interrupted.
    """
    feeds = load_json_list(feed_list_file)
    if not feeds:
        logger.warning(f"No feeds found in '{feed_list_file}'. Nothing to monitor.")
        return

    scheduler = FetchScheduler(
        FeedFetcher(),
        tick_interval=config["tick_interval"],
        min_host_interval=config["min_host_interval"],
        refresh_cooldown=config["refresh_cooldown"],
    )
    sink = LoggingNotificationSink()
    monitor = FeedMonitor(scheduler, sink, feed_list_file)
    sink.subscribers_of = monitor.subscribers

    for resource in feeds:
        handle = monitor.subscribe(resource, CONSOLE_SUBSCRIBER)
        logger.info(f"Queued {handle.nice_resource} ({handle.url})")

    scheduler.start()
    try:
        while True:
            time.sleep(60)
            next_refresh = scheduler.time_until_next()
            next_text = "-" if next_refresh is None else f"{next_refresh:.1f}s"
            logger.info(f"FETCH QUEUE SIZE: {len(scheduler.queue)}, NEXT REFRESH IN: {next_text}")
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        scheduler.shutdown()


if __name__ == "__main__":
    main()
