import pytest

from src.utils.custom_exceptions.fetch_exceptions import (
    FetchError,
    FetchErrorKind,
    MalformedIdentifierError,
    ParseError,
    TransportError,
)


@pytest.mark.parametrize(
    ("cls", "kind"),
    [
        (TransportError, FetchErrorKind.TRANSPORT),
        (ParseError, FetchErrorKind.PARSE),
        (MalformedIdentifierError, FetchErrorKind.MALFORMED_IDENTIFIER),
    ],
)
def test_kinds_and_default_messages(cls, kind):
    error = cls(url="https://a.com/rss")
    assert isinstance(error, FetchError)
    assert error.kind == kind
    assert str(error) == cls.default_msg
    assert error.url == "https://a.com/rss"


def test_custom_message():
    assert str(ParseError("broken xml")) == "broken xml"
