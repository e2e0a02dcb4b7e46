"""Shared helpers for scheduler and feed tests."""

from src.feeds.models import FeedEntry, ParsedFeed
from src.scheduler.fetch_scheduler import FetchScheduler


class FakeClock:
    """Manually advanced clock for rate-limit and cooldown tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_feed(url: str, *titles: str) -> ParsedFeed:
    return ParsedFeed(
        url=url,
        title="test feed",
        entries=[FeedEntry(title=t, link=f"{url}/{t}") for t in titles],
    )


def run_ticks(sched: FetchScheduler, clock: FakeClock, count: int, step: float = 0.5) -> None:
    """Tick count times, advancing the clock by step after each tick."""
    for _ in range(count):
        sched.tick()
        clock.advance(step)


RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example feed</title>
    <link>https://example.com/</link>
    <item>
      <title>First post</title>
      <link>https://example.com/first</link>
      <pubDate>Sat, 03 Mar 2018 09:05:00 GMT</pubDate>
      <author>alice@example.com (Alice)</author>
      <category>news</category>
      <category>long read</category>
      <description><![CDATA[<p>Hi</p><img src="https://example.com/pic.png"/>]]></description>
    </item>
    <item>
      <title>Second post</title>
      <link>https://example.com/second</link>
    </item>
  </channel>
</rss>
"""

NOT_A_FEED = b"<html><body><p>Just a page</p></body></html>"
