import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from benchconductor.profile import fetch


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/ok":
            status, body = 200, b"profile-bytes"
        else:
            status, body = 404, b"no such profile"
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()
    thread.join()


def test_fetch_writes_body(server_url, tmp_path):
    target = tmp_path / "cpu.out"
    fetch(server_url + "/ok", str(target))
    assert target.read_bytes() == b"profile-bytes"


def test_fetch_does_not_truncate(server_url, tmp_path):
    target = tmp_path / "cpu.out"
    target.write_bytes(b"x" * 20)
    fetch(server_url + "/ok", str(target))
    data = target.read_bytes()
    assert data.startswith(b"profile-bytes")
    assert len(data) == 20


def test_fetch_unexpected_status(server_url, tmp_path):
    target = tmp_path / "cpu.out"
    with pytest.raises(
        RuntimeError,
        match="unexpected 404 status code while fetching profile: no such profile",
    ):
        fetch(server_url + "/missing", str(target))


def test_fetch_invalid_url(tmp_path):
    with pytest.raises(ValueError):
        fetch("not a url", str(tmp_path / "cpu.out"))