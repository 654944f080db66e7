import socket
import threading

import pytest


def build_response(body: bytes, status: int = 200, content_type: str = "text/html; charset=utf-8") -> bytes:
    reason = {200: "OK", 301: "Moved Permanently", 404: "Not Found", 500: "Internal Server Error"}.get(status, "OK")
    headers = [
        f"HTTP/1.1 {status} {reason}",
        f"Content-Type: {content_type}",
        f"Content-Length: {len(body)}",
        "Connection: close",
    ]
    headers.extend(["", ""])  # end of headers
    return "\r\n".join(headers).encode("utf-8") + body


class CannedServer:
    """
    Raw-socket server on 127.0.0.1 that answers every connection with the
    same bytes and closes it. With ``payload=None`` it reads the request and
    then never answers, holding the connection until the client gives up.
    """

    def __init__(self, payload: bytes | None):
        self.payload = payload
        self.requests: list[bytes] = []
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(16)
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.port}/"

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            self._handle(conn)

    def _handle(self, conn: socket.socket):
        with conn:
            conn.settimeout(5.0)
            try:
                self.requests.append(conn.recv(2048))
                if self.payload is None:
                    while conn.recv(2048):
                        pass
                    return
                conn.sendall(self.payload)
            except OSError:
                pass

    def close(self):
        self._stop.set()
        self._thread.join(timeout=2)
        self._sock.close()


@pytest.fixture
def canned_server():
    servers = []

    def start(payload: bytes | None) -> CannedServer:
        server = CannedServer(payload)
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.close()


@pytest.fixture
def unused_port() -> int:
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]
