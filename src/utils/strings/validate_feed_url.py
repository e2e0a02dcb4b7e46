"""Utility for validating feed URL strings with pydantic."""

from typing import Annotated

from pydantic import AfterValidator


def validate_feed_url(v: str) -> str:
    """
    Validate a feed URL string.

    Ensure string starts with http(s):// and names a host.
    """
    if not v.startswith(("http://", "https://")):
        msg = "feed url must start with http:// or https://"
        raise ValueError(msg)
    if not v.split("://", 1)[1].split("/", 1)[0]:
        msg = "feed url must name a host"
        raise ValueError(msg)
    return v


FeedUrlString = Annotated[str, AfterValidator(validate_feed_url)]
