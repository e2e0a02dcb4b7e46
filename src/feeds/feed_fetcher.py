"""Feed fetcher for requesting and parsing RSS/Atom content."""
import time
from datetime import datetime, timezone

import feedparser
from bs4 import BeautifulSoup
from requests import RequestException, Session
from requests.exceptions import InvalidSchema, InvalidURL, MissingSchema

from src.config.settings import (
    HTTP_HEADER_FROM,
    HTTP_HEADER_USER_AGENT,
    MAX_RETRIES,
    REQUEST_TIMEOUT,
    RETRY_BACKOFF,
)
from src.feeds.models import FeedEntry, ParsedFeed
from src.utils.custom_exceptions.fetch_exceptions import (
    MalformedIdentifierError,
    ParseError,
    TransportError,
)
from src.utils.logger import logger
from src.utils.strings.validate_feed_url import validate_feed_url


def find_picture_url(html: str) -> str | None:
    """Return the src of the first image in an entry's content, if any."""
    if not html:
        return None
    img = BeautifulSoup(html, "html.parser").find("img", src=True)
    return img["src"] if img else None


def _entry_published(entry: feedparser.FeedParserDict) -> datetime | None:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    return datetime(*parsed[:6], tzinfo=timezone.utc)


def _entry_content(entry: feedparser.FeedParserDict) -> str:
    parts = [c.get("value", "") for c in entry.get("content", [])]
    parts.append(entry.get("summary", ""))
    return "\n".join(p for p in parts if p)


class FeedFetcher:
    """Fetch a feed url and parse it into a ParsedFeed."""

    def __init__(self, *, max_retries: int = MAX_RETRIES, retry_backoff: float = RETRY_BACKOFF,
                 timeout: float = REQUEST_TIMEOUT) -> None:
        """Initialize the FeedFetcher."""
        self.session = self.create_session()
        self.session_counter = 0

        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self.timeout = timeout

    def __call__(self, url: str) -> ParsedFeed:
        return self.fetch(url)

    def create_session(self) -> Session:
        session = Session()
        session.headers.update({"User-Agent": HTTP_HEADER_USER_AGENT})
        if HTTP_HEADER_FROM:
            session.headers.update({"From": HTTP_HEADER_FROM})
        return session

    def increment_session(self) -> None:
        """Reset the session after 100 requests."""
        self.session_counter += 1
        if self.session_counter % 100 == 0:
            self.session.close()
            self.session = self.create_session()

    def fetch(self, url: str) -> ParsedFeed:
        """Fetch url and return the parsed feed."""
        try:
            validate_feed_url(url)
        except ValueError as e:
            raise MalformedIdentifierError(f"Cannot fetch {url!r}: {e}", url=url) from e
        content = self.get_page(url)
        return self.parse_feed(url, content)

    def get_page(self, url: str) -> bytes:
        """Fetch a URL with automatic retries and return the raw body."""
        self.increment_session()
        last_exc = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()

            except (MissingSchema, InvalidSchema, InvalidURL) as e:
                msg = f"Feed url {url} was not understood: {e}"
                logger.error(msg)
                raise MalformedIdentifierError(msg, url=url) from e

            except RequestException as e:
                last_exc = e

                if attempt < self.max_retries:
                    sleep_for = self.retry_backoff * attempt
                    logger.warning(
                        f"[FETCHER] Failed to fetch {url} "
                        f"(attempt {attempt}/{self.max_retries}): {e} "
                        f"- retrying in {sleep_for:.2f}s",
                    )
                    time.sleep(sleep_for)
                else:
                    message = (
                        f"Failed to fetch feed {url} after {self.max_retries} attempts: {e}"
                    )
                    logger.error(message)
                    raise TransportError(message, url=url) from e
            else:
                return response.content

        msg = f"Unknown error while fetching {url}"
        raise TransportError(msg, url=url) from last_exc

    def parse_feed(self, url: str, content: bytes) -> ParsedFeed:
        """Parse a raw feed body. Raises ParseError if it is not a feed."""
        parsed = feedparser.parse(content)
        if parsed.get("bozo") and not parsed.entries:
            msg = f"The feed {url} could not be parsed: {parsed.get('bozo_exception')}"
            logger.error(msg)
            raise ParseError(msg, url=url)
        if not parsed.get("version") and not parsed.entries:
            msg = f"The payload at {url} is not a feed"
            logger.error(msg)
            raise ParseError(msg, url=url)

        entries = [
            FeedEntry(
                title=entry.get("title", ""),
                link=entry.get("link", ""),
                published=_entry_published(entry),
                author=entry.get("author"),
                categories=[t.get("term") for t in entry.get("tags", []) if t.get("term")],
                picture_url=find_picture_url(_entry_content(entry)),
            )
            for entry in parsed.entries
        ]
        return ParsedFeed(url=url, title=parsed.feed.get("title", ""), entries=entries)
