"""Utility function for extracting the rate-limit host from a feed url."""

import re

_SCHEME = re.compile(r"^http[^:/]*://", re.IGNORECASE)


def host_of(identifier: str) -> str:
    """Strip the scheme and everything after the first '/'. Port is kept."""
    without_scheme = _SCHEME.sub("", identifier.strip())
    return without_scheme.split("/", 1)[0]
