from enum import Enum


class FetchStatus(Enum):
    """Outcome of a single scheduled fetch, as seen by its callback."""

    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


class FeedType(Enum):
    """Kinds of feed resources a subscriber can follow."""

    SUBREDDIT = "SUBREDDIT"
    RSS = "RSS"
