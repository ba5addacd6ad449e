"""Cloud storage locations."""

from __future__ import annotations

from urllib.parse import unquote, urlsplit

_SCHEMES = ("gs", "gcs")


def parse_url(input_url: str) -> tuple[str, str]:
    """Split a ``gs://`` or ``gcs://`` URL into bucket name and object path.

    Raises :class:`ValueError` for malformed URLs and other schemes.
    """
    try:
        parsed = urlsplit(input_url)
    except ValueError as err:
        raise ValueError(f"invalid url: {err}") from err
    if parsed.scheme not in _SCHEMES:
        raise ValueError(f"invalid scheme: {parsed.scheme}")
    host = parsed.netloc.rpartition("@")[2]
    return host, unquote(parsed.path)