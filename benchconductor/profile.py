"""Fetching profiles over HTTP."""

from __future__ import annotations

import os
import shutil
import urllib.error
import urllib.request

# limits the maximum profile duration to one minute
_PROFILE_CLIENT_TIMEOUT = 60.0


def _status_error(status: int, body: bytes) -> RuntimeError:
    text = body.decode("utf-8", errors="replace")
    return RuntimeError(f"unexpected {status} status code while fetching profile: {text}")


def fetch(endpoint: str, output_file: str) -> None:
    """Download the profile at ``endpoint`` into ``output_file``.

    The file is created if needed and written from its start without being
    truncated. A response status other than 200 raises :class:`RuntimeError`
    carrying the response body.
    """
    request = urllib.request.Request(endpoint, method="GET")
    fd = os.open(output_file, os.O_CREAT | os.O_WRONLY, 0o644)
    with os.fdopen(fd, "wb") as out:
        try:
            response = urllib.request.urlopen(request, timeout=_PROFILE_CLIENT_TIMEOUT)
        except urllib.error.HTTPError as err:
            with err:
                body = err.read()
            raise _status_error(err.code, body) from None
        with response:
            if response.status != 200:
                raise _status_error(response.status, response.read())
            shutil.copyfileobj(response, out)