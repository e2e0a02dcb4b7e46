"""Structured result of fetching and parsing one feed."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.utils.strings.validate_feed_url import FeedUrlString


class FeedEntry(BaseModel):
    """A single post in a feed."""

    title: str = ""
    link: str = ""
    published: datetime | None = None
    author: str | None = None
    categories: list[str] = Field(default_factory=list)
    picture_url: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the post within its feed."""
        return self.link, self.title


class ParsedFeed(BaseModel):
    """A fetched feed and its entries, newest first as published."""

    url: FeedUrlString
    title: str = ""
    entries: list[FeedEntry] = Field(default_factory=list)
