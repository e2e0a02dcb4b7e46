"""Custom exceptions for fetching feeds."""

from enum import Enum


class FetchErrorKind(Enum):
    """Kinds of failures a fetch can end in."""

    TRANSPORT = "TRANSPORT"
    PARSE = "PARSE"
    MALFORMED_IDENTIFIER = "MALFORMED_IDENTIFIER"


class FetchError(Exception):
    """Base exception raised when a feed could not be fetched."""

    kind: FetchErrorKind | None = None
    default_msg = "Error when attempting to fetch feed."

    def __init__(self, message: str | None = None, *, url: str | None = None) -> None:
        """Initialize the exception."""
        self.url = url
        super().__init__(message or self.default_msg)


class TransportError(FetchError):
    """Exception raised when the connection to the feed host failed."""

    kind = FetchErrorKind.TRANSPORT
    default_msg = "Network error when attempting to fetch feed."


class ParseError(FetchError):
    """Exception raised when the payload is not a readable feed."""

    kind = FetchErrorKind.PARSE
    default_msg = "Feed payload could not be parsed."


class MalformedIdentifierError(FetchError):
    """Exception raised when the identifier can't be turned into a fetchable url."""

    kind = FetchErrorKind.MALFORMED_IDENTIFIER
    default_msg = "Feed identifier is not a fetchable url."
