"""Turn user supplied feed names into fetchable feed urls."""

import re

from pydantic import BaseModel, ConfigDict

from src.config.feed_enums import FeedType

_HTTP_URL = re.compile(r"^http.*://.*")
_SUBREDDIT_PREFIX = re.compile(r"^(?:.*?/)?r/")


def parse_type(resource: str) -> FeedType:
    """
    Parse the type of feed from the resource string.

    Anything on reddit.com, starting with r/ or not looking like an http url is a
    subreddit; everything else is a plain RSS/Atom feed.
    """
    if "reddit.com" in resource or resource.startswith("r/") or not _HTTP_URL.match(resource):
        return FeedType.SUBREDDIT
    return FeedType.RSS


def parse_resource(resource: str) -> str:
    """Reduce a subreddit url or r/name to the bare name; leave RSS urls as is."""
    resource = resource.strip()
    if parse_type(resource) == FeedType.RSS:
        return resource
    return _SUBREDDIT_PREFIX.sub("", resource).replace("/.rss", "").strip("/")


def feed_url(resource: str, feed_type: FeedType) -> str:
    """Return the url to fetch for resource."""
    if feed_type == FeedType.SUBREDDIT:
        return f"https://www.reddit.com/r/{resource}/.xml"
    return resource


class FeedHandle(BaseModel):
    """A feed the system knows about, identified by its resource and type."""

    model_config = ConfigDict(frozen=True)

    resource: str
    feed_type: FeedType

    @classmethod
    def from_input(cls, text: str) -> "FeedHandle":
        """Build a handle from whatever the user typed."""
        return cls(resource=parse_resource(text), feed_type=parse_type(text.strip()))

    @property
    def url(self) -> str:
        return feed_url(self.resource, self.feed_type)

    @property
    def nice_resource(self) -> str:
        """Name to show to people: r/name or the feed url."""
        if self.feed_type == FeedType.SUBREDDIT:
            return f"r/{self.resource}"
        return self.resource
