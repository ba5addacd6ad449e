"""Network helpers."""

from __future__ import annotations

import socket
import threading
import time
from concurrent.futures import CancelledError
from typing import Optional

_POLL_INTERVAL = 1.0
_DIAL_TIMEOUT = 1.0


def _split_endpoint(endpoint: str) -> tuple[str, int]:
    host, sep, port = endpoint.rpartition(":")
    if not sep or not host or not port:
        raise ValueError(f"missing port in address: {endpoint}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        return host, int(port)
    except ValueError:
        raise ValueError(f"invalid port in address: {endpoint}") from None


def _can_connect(host: str, port: int) -> bool:
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.settimeout(_DIAL_TIMEOUT)
            sock.connect((host, port))
    except OSError:
        return False
    return True


def wait_for_port_open(
    endpoint: str,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> None:
    """Block until a TCP connection to ``host:port`` succeeds.

    A connection is tried once a second. :class:`TimeoutError` is raised once
    ``timeout`` seconds have passed, :class:`CancelledError` when ``cancel``
    is set.
    """
    host, port = _split_endpoint(endpoint)
    event = cancel if cancel is not None else threading.Event()
    deadline = None if timeout is None else time.monotonic() + timeout
    while True:
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining < _POLL_INTERVAL:
                if event.wait(max(remaining, 0.0)):
                    raise CancelledError("waiting for port cancelled")
                raise TimeoutError(f"timed out waiting for {endpoint}")
        if event.wait(_POLL_INTERVAL):
            raise CancelledError("waiting for port cancelled")
        if _can_connect(host, port):
            return