"""application/x-www-form-urlencoded helpers.

Pairs are kept as ordered lists rather than dicts: hubIC does not care about
ordering, but a stable order keeps request bodies reproducible, and redirect
query strings may legitimately repeat a key.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit


def encode_form(pairs: Iterable[tuple[str, str]]) -> bytes:
    """Percent-encode pairs and join them with ``&``, preserving order."""
    return urlencode(list(pairs)).encode("ascii")


def decode_query(raw: str) -> list[tuple[str, str]]:
    """Decode a query string into pairs, keeping duplicates in encounter order."""
    return parse_qsl(raw, keep_blank_values=True)


def decode_url_query(url: str) -> list[tuple[str, str]]:
    """Decode the query string of a full or relative URL."""
    return decode_query(urlsplit(url).query)


def first_value(pairs: Iterable[tuple[str, str]], key: str) -> str | None:
    """Return the value of the first pair named ``key``, if any."""
    for name, value in pairs:
        if name == key:
            return value
    return None
